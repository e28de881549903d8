"""共有フィクスチャ"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from k1s0_auth_features import sampler

# 先頭 27 文字は無視され、末尾 13 文字から求めるコホート値は約 0.02
COHORT_0_02 = "000000000000000000000000000051eb851eb852"
# 末尾 13 文字から求めるコホート値は 0.04 をわずかに上回る (0.04000000000000049)
COHORT_0_04 = "0000000000000000000000000000a3d70a3d70a6"


class _FakeHash:
    def __init__(self, result: str) -> None:
        self._result = result
        self.updates: list[bytes] = []

    def update(self, data: bytes) -> None:
        self.updates.append(data)

    def hexdigest(self) -> str:
        return self._result


class DigestSpy:
    """sampler が生成したダイジェストを記録するスパイ。"""

    def __init__(self) -> None:
        self.result = COHORT_0_02
        self.hashes: list[_FakeHash] = []

    def sha1(self) -> _FakeHash:
        h = _FakeHash(self.result)
        self.hashes.append(h)
        return h

    @property
    def call_count(self) -> int:
        return len(self.hashes)

    def reset(self) -> None:
        self.hashes.clear()


@pytest.fixture
def digest_spy(monkeypatch: pytest.MonkeyPatch) -> DigestSpy:
    spy = DigestSpy()
    monkeypatch.setattr(sampler, "hashlib", SimpleNamespace(sha1=spy.sha1))
    return spy
