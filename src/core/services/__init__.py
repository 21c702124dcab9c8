"""Servicios del Core: versiones, registro, aprovisionamiento y orquestación."""
