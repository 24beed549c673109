import json

from conftest import FakeSplash, FakeWebflow, make_event

from eventsync import cli
from eventsync.infrastructure.external.event_sync.sync_service import SplashToWebflowSync
from eventsync.shared.exceptions.sync import TransportError


def _patch_builder(monkeypatch, service, seen=None):
    def fake_build(settings, *, notifier=None):
        if seen is not None:
            seen.append(notifier)
        return service

    monkeypatch.setattr(cli, "build_from_settings", fake_build)


def test_cli_prints_json_result(monkeypatch, capsys, sync_settings):
    service = SplashToWebflowSync(
        source=FakeSplash([make_event(1)]),
        destination=FakeWebflow({"name", "slug", "splash-id"}, []),
        sleep=lambda s: None,
    )
    _patch_builder(monkeypatch, service)

    code = cli.main(["--json"], settings=sync_settings)

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["created"] == 1
    assert out["total"] == 1


def test_cli_returns_1_on_fatal_error(monkeypatch, sync_settings):
    webflow = FakeWebflow(
        {"name", "slug", "splash-id"},
        [],
        schema_error=TransportError("Webflow", "schema de la colección", 500, "boom"),
    )
    service = SplashToWebflowSync(source=FakeSplash([make_event(1)]), destination=webflow, sleep=lambda s: None)
    _patch_builder(monkeypatch, service)

    assert cli.main([], settings=sync_settings) == 1


def test_cli_no_notify_passes_null_notifier(monkeypatch, sync_settings):
    seen = []
    service = SplashToWebflowSync(
        source=FakeSplash([]),
        destination=FakeWebflow({"name", "slug", "splash-id"}, []),
        sleep=lambda s: None,
    )
    _patch_builder(monkeypatch, service, seen)

    assert cli.main(["--no-notify", "--dry-run"], settings=sync_settings) == 0
    assert type(seen[0]).__name__ == "NullNotifier"
