from __future__ import annotations

import retrycall


def test_version() -> None:
    assert isinstance(retrycall.__version__, str)


def test_public_api() -> None:
    for name in retrycall.__all__:
        assert hasattr(retrycall, name)
