"""Tests for the command line entry point."""

import io

import queuecalc


def test_run_keys_prints_each_render():
    out = io.StringIO()
    display = queuecalc.run_keys("2+3+4=", out=out)
    assert display == "9"
    assert out.getvalue().splitlines() == ["2", "3", "5", "4", "9"]


def test_keys_command(capsys):
    assert queuecalc.main(["keys", "4+x2="]) == 0
    assert capsys.readouterr().out.splitlines()[-1] == "8"


def test_keys_command_rejects_unknown_symbol(capsys):
    assert queuecalc.main(["keys", "2^3"]) == 2
    assert "Unknown symbol" in capsys.readouterr().err


def test_serve_command_runs_app(monkeypatch):
    calls = []
    monkeypatch.setattr(queuecalc, "get_local_ip", lambda: "192.0.2.1")
    import api
    monkeypatch.setattr(api.app, "run", lambda **kwargs: calls.append(kwargs))
    assert queuecalc.main(["serve", "--port", "9999"]) == 0
    assert calls == [{'host': queuecalc.config.WEB_HOST, 'port': 9999, 'debug': False}]
