from urllib.error import URLError

import pytest
from pydantic import ValidationError

from url_publisher.build import BuildContext, EnvVarAction
from url_publisher.publisher import (
    DISPLAY_NAME,
    UrlPublisher,
    UrlPublisherConfig,
    is_applicable,
)

HOOK = "https://ci.example.test/hooks/build"


def test_config_strips_and_keeps_url():
    config = UrlPublisherConfig(publish_url=f"  {HOOK} ")
    assert config.publish_url == HOOK
    assert config.timeout_seconds == 10.0


@pytest.mark.parametrize("bad", ["", "   ", "ftp://host/x", "hooks/build", "http://"])
def test_config_rejects_invalid_urls(bad):
    with pytest.raises(ValidationError):
        UrlPublisherConfig(publish_url=bad)


def test_config_rejects_non_positive_timeout():
    with pytest.raises(ValidationError):
        UrlPublisherConfig(publish_url=HOOK, timeout_seconds=0)


def test_perform_success_exports_status(fake_opener):
    build = BuildContext(name="nightly#42")
    publisher = UrlPublisher(UrlPublisherConfig(publish_url=HOOK), opener=fake_opener(302))

    assert publisher.perform(build) is True

    assert build.env == {"HTTP_STATUS_ACTION": "302"}
    assert build.actions == [EnvVarAction("HTTP_STATUS_ACTION", "302")]
    assert build.log == [
        f"Triggered URL {HOOK} Successfully!",
        f"Status Code for URL {HOOK} is 302",
    ]


def test_perform_never_fails_the_build(fake_opener):
    build = BuildContext(env={"EXISTING": "1"})
    opener = fake_opener(side_effect=URLError("connection refused"))
    publisher = UrlPublisher(UrlPublisherConfig(publish_url=HOOK), opener=opener)

    assert publisher.perform(build) is True

    assert build.env == {"EXISTING": "1"}
    assert build.actions == []
    assert build.log == [
        f"Failed to trigger the suggested URL -> {HOOK}: connection refused"
    ]


def test_perform_passes_configured_timeout(fake_opener):
    opener = fake_opener(200)
    publisher = UrlPublisher(
        UrlPublisherConfig(publish_url=HOOK, timeout_seconds=1.5), opener=opener
    )

    publisher.perform(BuildContext())

    assert opener.open.call_args.kwargs["timeout"] == 1.5


def test_perform_twice_overwrites_variable(fake_opener):
    build = BuildContext()
    UrlPublisher(UrlPublisherConfig(publish_url=HOOK), opener=fake_opener(500)).perform(build)
    UrlPublisher(UrlPublisherConfig(publish_url=HOOK), opener=fake_opener(200)).perform(build)

    assert build.env["HTTP_STATUS_ACTION"] == "200"
    assert len(build.actions) == 2


def test_env_var_action_merges_into_env():
    env = {"A": "1"}
    EnvVarAction("HTTP_STATUS_ACTION", "404").build_env_vars(env)
    assert env == {"A": "1", "HTTP_STATUS_ACTION": "404"}


def test_non_env_actions_are_recorded_only():
    build = BuildContext()
    build.add_action("badge")
    assert build.actions == ["badge"]
    assert build.env == {}


def test_descriptor_metadata():
    assert DISPLAY_NAME == "My URL Publisher"
    assert UrlPublisher.display_name == DISPLAY_NAME
    assert is_applicable(object) is True
