"""
HealthTracker — CLI Tests
===========================

What:  HttpApiClient, the about rendering and the argparse entry point.
How:   httpx.MockTransport stands in for the API, so no server or socket is
       involved.

What we test:
    ✅ A 200 /about is parsed into AboutInfo
    ✅ Connection errors, 5xx and malformed payloads all mean "unreachable"
    ✅ Exactly one request per call (no retries)
    ✅ Table output, unreachable message, --version, bare invocation
"""

import datetime
import io

import httpx
import pytest

from healthtracker import __version__
from healthtracker.cli.api_client import HttpApiClient
from healthtracker.cli.commands import UNREACHABLE_MESSAGE, render_about
from healthtracker.cli.main import main
from healthtracker.config import Settings
from healthtracker.schemas.status import AboutInfo

ABOUT_JSON = {
    "apiVersion": "0.1.0",
    "weighInsCount": 12,
    "runsCount": 3,
    "lastWeighInDate": "2025-06-01",
    "lastRunDate": None,
}


def client_for(handler) -> HttpApiClient:
    return HttpApiClient("http://api.test", timeout=1.0, transport=httpx.MockTransport(handler))


def refuse(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


class TestHttpApiClient:

    def test_parses_about(self):
        seen = []

        def handler(request):
            seen.append(request.url.path)
            return httpx.Response(200, json=ABOUT_JSON)

        with client_for(handler) as client:
            about = client.get_about_info()

        assert seen == ["/about"]
        assert about.weigh_ins_count == 12
        assert about.last_weigh_in_date == datetime.date(2025, 6, 1)
        assert about.last_run_date is None

    def test_connection_refused_is_none_without_retry(self):
        calls = []

        def handler(request):
            calls.append(request)
            return refuse(request)

        with client_for(handler) as client:
            assert client.get_about_info() is None

        assert len(calls) == 1

    def test_server_error_is_none(self):
        with client_for(lambda request: httpx.Response(503, json={"error": "x"})) as client:
            assert client.get_about_info() is None

    def test_non_json_is_none(self):
        with client_for(lambda request: httpx.Response(200, text="<html>")) as client:
            assert client.get_about_info() is None

    def test_wrong_shape_is_none(self):
        with client_for(lambda request: httpx.Response(200, json={"weighInsCount": "many"})) as client:
            assert client.get_about_info() is None


class TestRenderAbout:

    def test_unreachable(self):
        assert render_about(None) == UNREACHABLE_MESSAGE
        assert "unreachable" in UNREACHABLE_MESSAGE

    def test_table(self):
        text = render_about(AboutInfo.model_validate(ABOUT_JSON))
        lines = text.splitlines()

        assert lines[0] == "Health Tracker CLI"
        assert f"| CLI Version      | {__version__}" in text
        assert "| Weigh-ins logged | 12" in text
        assert "| Last weigh-in    | 2025-06-01" in text
        assert "| Last run         | None" in text
        # every table row has the same width
        assert len({len(line) for line in lines[1:]}) == 1


class TestMain:

    def settings(self) -> Settings:
        return Settings(_env_file=None, api_url="http://configured.test")

    def test_about_success(self):
        out = io.StringIO()
        urls = []

        def factory(base_url, timeout):
            urls.append(base_url)
            return HttpApiClient(
                base_url, timeout,
                transport=httpx.MockTransport(lambda request: httpx.Response(200, json=ABOUT_JSON)),
            )

        code = main(["about"], out=out, settings=self.settings(), client_factory=factory)

        assert code == 0
        assert urls == ["http://configured.test"]
        assert "Runs logged" in out.getvalue()

    def test_about_unreachable_still_exits_zero(self):
        out = io.StringIO()

        def factory(base_url, timeout):
            return HttpApiClient(base_url, timeout, transport=httpx.MockTransport(refuse))

        code = main(["about"], out=out, settings=self.settings(), client_factory=factory)

        assert code == 0
        assert out.getvalue().strip() == UNREACHABLE_MESSAGE

    def test_api_url_flag_wins(self):
        urls = []

        def factory(base_url, timeout):
            urls.append(base_url)
            return HttpApiClient(base_url, timeout, transport=httpx.MockTransport(refuse))

        main(
            ["--api-url", "http://flag.test", "about"],
            out=io.StringIO(),
            settings=self.settings(),
            client_factory=factory,
        )

        assert urls == ["http://flag.test"]

    def test_no_command_prints_hint(self):
        out = io.StringIO()
        assert main([], out=out) == 0
        assert "--help" in out.getvalue()

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == __version__

    def test_unknown_command(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["bogus"], out=io.StringIO())
        assert exc_info.value.code == 2
