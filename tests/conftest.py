import sys
from pathlib import Path
from typing import Callable

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()

from dupdetect.model import MethodRecord  # noqa: E402

RecordFactory = Callable[..., MethodRecord]


@pytest.fixture
def make_record() -> RecordFactory:
    """Return a factory building records with unique default locations."""
    counter = {"line": 0}

    def _make(
        body: str,
        method_name: str = "process",
        signature: str | None = None,
        class_name: str = "Sample",
        file_path: str | None = None,
        package_name: str = "com.example",
    ) -> MethodRecord:
        counter["line"] += 10
        start_line = counter["line"]
        return MethodRecord(
            class_name=class_name,
            method_name=method_name,
            signature=signature or f"public void {method_name}(int[] data)",
            body=body,
            file_path=file_path or f"src/{class_name}.java",
            start_line=start_line,
            end_line=start_line + 5,
            package_name=package_name,
        )

    return _make
