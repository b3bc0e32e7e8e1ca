from typing import Optional

from mlsensors.core import ComparisonResult, ErrorKind


def assert_success(result: ComparisonResult) -> None:
    assert result.success is True
    assert result.message is None
    assert result.kind is None
    assert bool(result)


def assert_failure(
    result: ComparisonResult, kind: ErrorKind, message: Optional[str] = None
) -> None:
    assert result.success is False
    assert not result
    assert result.kind == kind
    assert result.message is not None
    if message is not None:
        assert result.message == message
