from __future__ import annotations

import re

import pytest

from workspace_access.common import ids
from workspace_access.common.ids import generate_role_id


def test_generate_role_id_format() -> None:
    role_id = generate_role_id([], clock=lambda: 1_700_000_000.5)

    assert re.fullmatch(r"role_1700000000500_[0-9a-f]{8}", role_id)


def test_generate_role_id_honours_prefix_and_entropy() -> None:
    role_id = generate_role_id([], prefix="custom", entropy_bytes=2)

    assert re.fullmatch(r"custom_\d+_[0-9a-f]{4}", role_id)


def test_generate_role_id_skips_existing(monkeypatch: pytest.MonkeyPatch) -> None:
    suffixes = iter(["aaaa", "aaaa", "bbbb"])
    monkeypatch.setattr(ids.secrets, "token_hex", lambda _n: next(suffixes))

    role_id = generate_role_id(["role_1000_aaaa"], clock=lambda: 1.0)

    assert role_id == "role_1000_bbbb"


def test_generate_role_id_gives_up_when_exhausted(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(ids.secrets, "token_hex", lambda _n: "aaaa")

    with pytest.raises(RuntimeError):
        generate_role_id(["role_1000_aaaa"], clock=lambda: 1.0)
