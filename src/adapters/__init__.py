"""Adaptadores de I/O: HTTP, fuentes de mkcert, disco y subprocesos."""
