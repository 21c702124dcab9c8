"""Tests del orquestador: cuándo se regenera el certificado y qué devuelve."""

from __future__ import annotations

import logging

import pytest
import pytest_asyncio

from core.config import AppSettings
from core.domain.models import CertHash, CertRecord, ProvisionOutcome, SourceInfo, SourceKind
from core.errors import CertificateNotFoundError, GenerationCommandError, SourceConfigurationError
from core.services.mkcert import Mkcert, MkcertOptions
from tests.fakes import FakeDownloader, FakeMkcertRunner, FakeSource, RecordingLogger, sha256

URL = "https://example.test/mkcert"


def _mkcert(
    settings: AppSettings,
    logger: RecordingLogger,
    *,
    runner: FakeMkcertRunner,
    source: FakeSource | None = None,
    downloader: FakeDownloader | None = None,
) -> Mkcert:
    options = MkcertOptions(
        custom_source=source or FakeSource(SourceInfo(version="v1.4.4", download_url=URL)),
        logger=logger,
    )
    return Mkcert.create(options, settings=settings, downloader=downloader or FakeDownloader(), runner=runner)


@pytest.fixture
def runner() -> FakeMkcertRunner:
    return FakeMkcertRunner()


@pytest_asyncio.fixture
async def mkcert(settings, logger, runner) -> Mkcert:
    instance = _mkcert(settings, logger, runner=runner)
    await instance.init()
    return instance


def _seed(mkcert: Mkcert, *, hosts: list[str], key: bytes, cert: bytes) -> None:
    mkcert.key_file_path.parent.mkdir(parents=True, exist_ok=True)
    mkcert.key_file_path.write_bytes(key)
    mkcert.cert_file_path.write_bytes(cert)
    mkcert.state.set_record(CertRecord(hosts=hosts, hash=CertHash(key=sha256(key), cert=sha256(cert))))


@pytest.mark.asyncio
async def test_init_installs_binary_and_first_install_generates(mkcert, runner, settings) -> None:
    assert settings.mkcert_saved_path.exists()
    assert mkcert.state.get_version() == "v1.4.4"

    certificate = await mkcert.install(["localhost"])

    assert len(runner.calls) == 1
    assert runner.calls[0] == [
        str(settings.mkcert_saved_path),
        "-install",
        "-key-file",
        str(settings.key_file_path),
        "-cert-file",
        str(settings.cert_file_path),
        "localhost",
    ]
    assert certificate.key == settings.key_file_path.read_bytes()
    assert certificate.cert == settings.cert_file_path.read_bytes()


@pytest.mark.asyncio
async def test_second_install_with_same_hosts_is_noop(mkcert, runner) -> None:
    first = await mkcert.install(["localhost", "127.0.0.1"])
    second = await mkcert.install(["127.0.0.1", "localhost"])

    assert len(runner.calls) == 1
    assert first == second


@pytest.mark.asyncio
async def test_duplicate_hosts_are_collapsed(mkcert, runner) -> None:
    await mkcert.install(["localhost", "localhost", "127.0.0.1"])

    assert runner.calls[0][-2:] == ["localhost", "127.0.0.1"]
    assert mkcert.record.get_hosts() == ["localhost", "127.0.0.1"]


@pytest.mark.asyncio
async def test_host_change_regenerates_once(mkcert, runner) -> None:
    await mkcert.install(["localhost"])
    await mkcert.install(["localhost", "example.test"])
    await mkcert.install(["example.test", "localhost"])

    assert len(runner.calls) == 2
    assert runner.calls[1][-2:] == ["localhost", "example.test"]


@pytest.mark.asyncio
async def test_tampered_certificate_is_regenerated(mkcert, runner) -> None:
    await mkcert.install(["localhost"])
    mkcert.cert_file_path.write_bytes(b"edited by hand")

    certificate = await mkcert.install(["localhost"])

    assert len(runner.calls) == 2
    assert certificate.cert != b"edited by hand"
    assert mkcert.record.get_hash() == mkcert.get_latest_hash()


@pytest.mark.asyncio
async def test_deleted_key_is_regenerated(mkcert, runner) -> None:
    await mkcert.install(["localhost"])
    mkcert.key_file_path.unlink()

    await mkcert.install(["localhost"])

    assert len(runner.calls) == 2
    assert mkcert.key_file_path.exists()


@pytest.mark.asyncio
async def test_matching_record_and_files_skip_regeneration(mkcert, runner, logger) -> None:
    _seed(mkcert, hosts=["localhost"], key=b"abc", cert=b"def")

    certificate = await mkcert.install(["localhost"])

    assert runner.calls == []
    assert (certificate.key, certificate.cert) == (b"abc", b"def")
    assert "Neither hosts nor hash has changed, skip regenerate certificate" in logger.messages("debug")


@pytest.mark.asyncio
async def test_new_host_regenerates_and_updates_record(mkcert, runner) -> None:
    _seed(mkcert, hosts=["localhost"], key=b"abc", cert=b"def")

    certificate = await mkcert.install(["localhost", "127.0.0.1"])

    assert len(runner.calls) == 1
    assert runner.calls[0][-2:] == ["localhost", "127.0.0.1"]
    record = mkcert.record_snapshot()
    assert record is not None
    assert set(record.hosts) == {"localhost", "127.0.0.1"}
    assert record.hash == CertHash(key=sha256(certificate.key), cert=sha256(certificate.cert))


@pytest.mark.asyncio
async def test_empty_hosts_never_regenerates(mkcert, runner) -> None:
    _seed(mkcert, hosts=["other.test"], key=b"abc", cert=b"def")

    certificate = await mkcert.install([])

    assert runner.calls == []
    assert certificate.key == b"abc"


@pytest.mark.asyncio
async def test_empty_hosts_without_certificate_fails(mkcert, runner) -> None:
    with pytest.raises(CertificateNotFoundError):
        await mkcert.install([])
    assert runner.calls == []


@pytest.mark.asyncio
async def test_generation_failure_propagates_and_keeps_record(settings, logger) -> None:
    runner = FakeMkcertRunner(fail=True)
    mkcert = _mkcert(settings, logger, runner=runner)
    await mkcert.init()

    with pytest.raises(GenerationCommandError):
        await mkcert.install(["localhost"])
    assert mkcert.record_snapshot() is None


@pytest.mark.asyncio
async def test_missing_binary_still_attempts_generation(settings, logger, runner) -> None:
    mkcert = _mkcert(settings, logger, runner=runner, source=FakeSource(None))
    result = await mkcert.init()
    assert result.outcome is ProvisionOutcome.SOURCE_UNAVAILABLE
    assert result.binary is None

    with pytest.raises(GenerationCommandError):
        await mkcert.install(["localhost"])

    assert runner.calls[0][0] == ""
    assert any("Mkcert does not exist" in m for m in logger.messages("debug"))


@pytest.mark.asyncio
async def test_install_loads_state_without_init(settings, logger, runner) -> None:
    first = _mkcert(settings, logger, runner=runner)
    await first.init()
    await first.install(["localhost"])

    second = _mkcert(settings, logger, runner=runner)
    await second.install(["localhost"])

    assert len(runner.calls) == 1


def test_custom_source_kind_requires_object(settings) -> None:
    with pytest.raises(SourceConfigurationError):
        Mkcert.create(MkcertOptions(source=SourceKind.CUSTOM), settings=settings)


def test_source_kind_defaults_to_settings(settings) -> None:
    assert Mkcert.create(settings=settings).source_kind is SourceKind.GITHUB
    assert Mkcert.create(MkcertOptions(source=SourceKind.CODING), settings=settings).source_kind is SourceKind.CODING
    assert Mkcert.create(MkcertOptions(custom_source=FakeSource(None)), settings=settings).source_kind is SourceKind.CUSTOM


@pytest.fixture
def stdlib_logger(caplog) -> logging.Logger:
    caplog.set_level(logging.DEBUG, logger="devcert.tests")
    return logging.getLogger("devcert.tests")


@pytest.mark.asyncio
async def test_stdlib_logger_reports_missing_local_binary(settings, runner, stdlib_logger, caplog, tmp_path) -> None:
    missing = tmp_path / "nope" / "mkcert"
    options = MkcertOptions(custom_source=FakeSource(None), mkcert_path=missing, logger=stdlib_logger)
    mkcert = Mkcert.create(options, settings=settings, downloader=FakeDownloader(), runner=runner)

    result = await mkcert.init()
    with pytest.raises(GenerationCommandError):
        await mkcert.install(["localhost"])

    assert result.outcome is ProvisionOutcome.BINARY_MISSING_LOCAL
    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert errors == [f"{missing} does not exist, please check the mkcertPath parameter"]


@pytest.mark.asyncio
async def test_stdlib_logger_reports_deferred_major_upgrade(settings, runner, stdlib_logger, caplog) -> None:
    options = MkcertOptions(
        custom_source=FakeSource(SourceInfo(version="v2.0.0", download_url=URL)),
        auto_upgrade=True,
        logger=stdlib_logger,
    )
    mkcert = Mkcert.create(options, settings=settings, downloader=FakeDownloader(), runner=runner)
    mkcert.state.init()
    mkcert.state.set_version("v1.4.4")
    settings.mkcert_saved_path.write_bytes(b"old binary")

    result = await mkcert.init()
    await mkcert.install(["localhost"])

    assert result.outcome is ProvisionOutcome.BREAKING_DEFERRED
    messages = [r.getMessage() for r in caplog.records]
    assert any("v1.4.4" in m and "v2.0.0" in m and "breaking" in m for m in messages)
    assert any("start regenerate certificate" in m for m in messages)
