import pytest
from pydantic import ValidationError

from eventsync.core.config import Settings, parse_chat_ids


def test_parse_chat_ids():
    assert parse_chat_ids("") == []
    assert parse_chat_ids("111, 222,,333 ") == ["111", "222", "333"]


def test_missing_required_lists_empty_credentials():
    settings = Settings(
        _env_file=None,
        SPLASH_CLIENT_ID="cid",
        SPLASH_CLIENT_SECRET="",
        SPLASH_USERNAME="u",
        SPLASH_PASSWORD="p",
        WEBFLOW_API_TOKEN="",
        WEBFLOW_COLLECTION_ID="col",
    )
    assert settings.missing_required() == ["SPLASH_CLIENT_SECRET", "WEBFLOW_API_TOKEN"]


def test_defaults_match_webflow_rate_limit(sync_settings):
    # 60 req/min en Webflow
    assert 60 / sync_settings.WEBFLOW_WRITE_DELAY_SECONDS < 60
    assert sync_settings.WEBFLOW_PAGE_SIZE == 100
    assert sync_settings.SPLASH_PAGE_SIZE == 50
    assert sync_settings.telegram_chat_ids == []


@pytest.mark.parametrize("page_size", [0, 101, 200])
def test_webflow_page_size_is_capped_by_api_limit(page_size):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, WEBFLOW_PAGE_SIZE=page_size)
