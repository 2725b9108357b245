from __future__ import annotations

import reset_stats
from BackEnd.repos import session_repo
from BackEnd.repos.session_repo import STANDING

T0 = 1_718_000_000_000


def test_nothing_to_reset(monkeypatch) -> None:
    monkeypatch.setattr("builtins.input", lambda _prompt: "yes")

    assert reset_stats.reset_all_stats() is False


def test_reset_requires_confirmation(monkeypatch) -> None:
    session_repo.set_state(STANDING, T0)
    monkeypatch.setattr("builtins.input", lambda _prompt: "no")

    assert reset_stats.reset_all_stats() is False
    assert len(session_repo.get_sessions()) == 1


def test_reset_clears_log(monkeypatch) -> None:
    session_repo.set_state(STANDING, T0)
    monkeypatch.setattr("builtins.input", lambda _prompt: "y")

    assert reset_stats.reset_all_stats() is True
    assert session_repo.get_sessions() == []
