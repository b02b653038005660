"""
Helpers shared by the runtime_stager tests.
"""

import contextlib
import pathlib
import zipfile
from typing import Dict, Iterator, List, Optional, Union

from runtime_stager.stager_config import DirectoryLayout
from runtime_stager.stager_exceptions import DownloadError
from runtime_stager.stager_logger import StagerLogger


@contextlib.contextmanager
def create_test_layout(root: pathlib.Path, **kwargs) -> Iterator[DirectoryLayout]:
    """Yield a DirectoryLayout rooted in a temporary directory."""
    yield DirectoryLayout.from_root(root, **kwargs)


def make_embed_zip(
    path: pathlib.Path,
    version: Optional[str] = "312",
    extra_files: Optional[Dict[str, bytes]] = None,
) -> pathlib.Path:
    """
    Write a small zip shaped like the embeddable Python distribution.

    Args:
        path: Where to write the zip
        version: Version token of the ._pth file; None leaves it out
        extra_files: Additional entries to add
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    entries: Dict[str, bytes] = {
        "python.exe": b"MZ fake interpreter",
        "LICENSE.txt": b"license",
    }
    if version is not None:
        entries[f"python{version}._pth"] = f"python{version}.zip\n.\n\n#import site\n".encode()
        entries[f"python{version}.zip"] = b"PK fake stdlib"
    entries.update(extra_files or {})

    with zipfile.ZipFile(path, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return path


class FakeFetcher:
    """
    Stands in for HttpFetcher.

    ``payloads`` maps a URL to the bytes to write, or to an exception to raise.
    """

    def __init__(self, payloads: Dict[str, Union[bytes, Exception]]):
        self.payloads = payloads
        self.calls: List[str] = []

    def stream_to(self, url: str, destination: pathlib.Path) -> int:
        self.calls.append(url)
        payload = self.payloads.get(url)
        if payload is None:
            raise DownloadError(f"HTTP 404 Not Found for {url}")
        if isinstance(payload, Exception):
            raise payload
        destination.write_bytes(payload)
        return len(payload)


class FakeRunner:
    """
    Stands in for ProcessRunner.

    On success it writes the sorted listing of the source directory into the
    target archive, so tests can check what a run would have packaged.
    """

    def __init__(self, returncode: int = 0):
        self.returncode = returncode
        self.calls: List[Dict] = []

    def run(self, command: List[str], cwd: pathlib.Path) -> int:
        self.calls.append({"command": command, "cwd": cwd})
        if self.returncode == 0:
            target = pathlib.Path(command[2])
            source = pathlib.Path(command[3]).parent
            listing = sorted(p.name for p in source.iterdir())
            if target.exists():
                listing = target.read_text().splitlines() + listing
            target.write_text("\n".join(listing))
        return self.returncode


def quiet_logger() -> StagerLogger:
    return StagerLogger("runtime_stager.tests")
