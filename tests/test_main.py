import uvicorn

from chattercup import main


def test_run_serves_app_with_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("PORT", "9100")

    main.run()

    assert calls == [("chattercup.main:app", {"host": "127.0.0.1", "port": 9100})]


def test_run_defaults_to_port_8000(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append(kwargs))
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.delenv("PORT", raising=False)

    main.run()

    assert calls == [{"host": "0.0.0.0", "port": 8000}]
