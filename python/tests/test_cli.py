import pathlib
import subprocess
import sys
from pathlib import Path

import httpx
import pytest
from oshi import OshiClient, __version__
from oshi.__main__ import build_parser, main, run

UPLOAD_BODY = (
    "https://oshi.at/a/9a8ab0e8 [Admin]\n"
    "https://oshi.at/BzhK/gopher.png [Download]\n"
)


def make_client(responses: dict[str, httpx.Response], seen: list[httpx.Request]) -> OshiClient:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return responses[request.method]

    return OshiClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def test_version_flag() -> None:
    """Test the --version flag outputs correct version."""
    result = subprocess.run(
        [sys.executable, "-m", "oshi", "--version"],
        capture_output=True,
        text=True,
        cwd=Path(__file__).parent.parent,
    )

    assert result.returncode == 0
    assert f"oshi {__version__}" in result.stdout


def test_no_command(capsys) -> None:
    assert main([]) == 1
    assert "usage" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_upload_command(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "gopher.png"
    path.write_bytes(b"\x89PNG")
    seen: list[httpx.Request] = []
    client = make_client({"PUT": httpx.Response(200, text=UPLOAD_BODY)}, seen)

    args = build_parser().parse_args(["upload", str(path), "--expire", "5", "--autodestroy"])
    lines = await run(args, client)

    assert lines == [
        "https://oshi.at/a/9a8ab0e8 [Admin]",
        "https://oshi.at/BzhK/gopher.png [Download]",
    ]
    assert dict(seen[0].url.params) == {"filename": "gopher.png", "expire": "5", "autodestroy": "1"}
    assert seen[0].content == b"\x89PNG"


@pytest.mark.asyncio
async def test_hashsum_command_accepts_download_url() -> None:
    seen: list[httpx.Request] = []
    client = make_client({"GET": httpx.Response(200, text="deadbeef (sha256)")}, seen)

    args = build_parser().parse_args(["hashsum", "https://oshi.at/BzhK/gopher.png"])
    lines = await run(args, client)

    assert lines == ["deadbeef (sha256)"]
    assert seen[0].url.path == "/hashsum/BzhK"


@pytest.mark.asyncio
async def test_delete_command() -> None:
    seen: list[httpx.Request] = []
    client = make_client({"DELETE": httpx.Response(200, text="ok")}, seen)

    args = build_parser().parse_args(["delete", "https://oshi.at/a/9a8ab0e8"])

    assert await run(args, client) == []
    assert seen[0].method == "DELETE"


@pytest.mark.asyncio
async def test_tor_command() -> None:
    seen: list[httpx.Request] = []
    client = make_client({"GET": httpx.Response(200, text="abc.onion\n")}, seen)

    args = build_parser().parse_args(["tor"])

    assert await run(args, client) == ["abc.onion"]


def test_command_error_exit_status(capsys, monkeypatch) -> None:
    monkeypatch.setattr("oshi.__main__.setup_logging", lambda: None)
    assert main(["--endpoint", "ftp://oshi.at", "tor"]) == 1
    assert "oshi: Invalid URL" in capsys.readouterr().err


def test_missing_file_exit_status(tmp_path: pathlib.Path, capsys, monkeypatch) -> None:
    monkeypatch.setattr("oshi.__main__.setup_logging", lambda: None)
    assert main(["upload", str(tmp_path / "missing.png")]) == 1
    assert "missing.png" in capsys.readouterr().err
