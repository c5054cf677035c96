"""Tests for the command-line entry point."""

import sys

import main


def test_run_headless_returns_stats():
    stats = main.run_headless(20, 10, seed=1, population=3)
    assert stats["frame"] == 20
    assert stats["population"] >= 1


def test_run_headless_is_deterministic():
    first = main.run_headless(15, 5, seed=4, population=2)
    second = main.run_headless(15, 5, seed=4, population=2)
    assert first == second


def test_main_headless(monkeypatch):
    calls = []
    monkeypatch.setattr(
        sys,
        "argv",
        ["main.py", "--headless", "--ticks", "3", "--seed", "2", "--population", "1"],
    )
    monkeypatch.setattr(main, "run_headless", lambda *args, **kwargs: calls.append((args, kwargs)))

    main.main()

    assert calls == [((3, 500), {"seed": 2, "dt": None, "population": 1})]
