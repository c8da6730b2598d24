from pathlib import Path

import pytest

from vocab_audio.config import GeneratorConfig
from vocab_audio.errors import NetworkError


class FakeFetcher:
    """Returns fake MP3 bytes; fails for (text, lang) pairs listed in `failures`."""

    def __init__(self, failures=()):
        self.failures = set(failures)
        self.calls = []

    def fetch(self, text, lang):
        self.calls.append((text, lang))
        if (text, lang) in self.failures:
            raise NetworkError(f"HTTP 503 for {text}")
        return f"<{lang}:{text}>".encode("utf-8")


class FakeSilence:
    def __init__(self, payload=b"<pause>"):
        self.payload = payload

    def generate(self, duration, output_file):
        Path(output_file).write_bytes(self.payload)
        return output_file


class FakeAssembler:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def assemble(self, first, silence, second, output_file):
        self.calls.append((Path(first), Path(silence), Path(second), Path(output_file)))
        if self.error:
            Path(output_file).write_bytes(b"partial")
            raise self.error
        data = b"".join(Path(p).read_bytes() for p in (first, silence, second))
        Path(output_file).write_bytes(data)
        return output_file


@pytest.fixture
def config(tmp_path: Path):
    return GeneratorConfig(output_dir=tmp_path / "out", temp_dir=tmp_path / "tmp", row_delay=0.0)
