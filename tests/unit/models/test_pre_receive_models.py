"""Unit tests for the pre-receive pydantic models."""

import pytest
from pydantic import ValidationError

from ghe_client.models import (
    NewPreReceiveEnvironment,
    NewPreReceiveHook,
    PreReceiveEnvironment,
    PreReceiveEnvironmentDownload,
    PreReceiveEnvironmentDownloadState,
    PreReceiveHook,
    PreReceiveHookEnforcement,
    UpdatePreReceiveHook,
)

HOOK_PAYLOAD = {
    "id": 1,
    "name": "Check Commits",
    "enforcement": "disabled",
    "script": "scripts/commmit_check.sh",
    "script_repository": {
        "id": 595,
        "full_name": "DevIT/hooks",
        "url": "https://github.example.com/api/v3/repos/DevIT/hooks",
        "html_url": "https://github.example.com/DevIT/hooks",
    },
    "environment": {
        "id": 2,
        "name": "DevTools Hook Env",
        "image_url": "https://my_file_server/path/to/devtools_env.tar.gz",
        "url": "https://github.example.com/api/v3/admin/pre-receive-environments/2",
        "html_url": "https://github.example.com/admin/pre-receive-environments/2",
        "default_environment": False,
        "created_at": "2016-05-20T11:35:45-05:00",
        "hooks_count": 1,
        "download": {
            "url": "https://github.example.com/api/v3/admin/pre-receive-environments/2/downloads/latest",
            "state": "success",
            "downloaded_at": "2016-05-26T07:42:53-05:00",
            "message": None,
        },
    },
    "allow_downstream_configuration": False,
}


class TestResponseModels:
    def test_hook_from_documented_payload(self):
        hook = PreReceiveHook.model_validate(HOOK_PAYLOAD)
        assert hook.enforcement is PreReceiveHookEnforcement.DISABLED
        assert hook.script_repository.full_name == "DevIT/hooks"
        assert hook.environment.hooks_count == 1
        assert hook.environment.download.state is PreReceiveEnvironmentDownloadState.SUCCESS
        assert hook.environment.download.downloaded_at.year == 2016

    def test_unknown_fields_ignored(self):
        hook = PreReceiveHook.model_validate({"id": 1, "name": "h", "brand_new_field": 1})
        assert not hasattr(hook, "brand_new_field")

    def test_response_models_frozen(self):
        hook = PreReceiveHook(id=1, name="h")
        with pytest.raises(ValidationError):
            hook.name = "other"

    def test_enforcement_compares_to_wire_value(self):
        assert PreReceiveHookEnforcement.TESTING == "testing"

    def test_download_str(self):
        download = PreReceiveEnvironmentDownload(state="failed", message="404 fetching tarball")
        assert str(download) == "State: failed Message: 404 fetching tarball"

    def test_environment_minimal(self):
        env = PreReceiveEnvironment(id=1, name="default")
        assert env.default_environment is False
        assert env.download is None


class TestNewPreReceiveHook:
    def test_shorthand_repository_and_environment(self):
        hook = NewPreReceiveHook(
            name="check", script="a.sh", script_repository="octo-org/hooks", environment=3
        )
        assert hook.script_repository.full_name == "octo-org/hooks"
        assert hook.environment.id == 3

    def test_nested_form_accepted(self):
        hook = NewPreReceiveHook(
            name="check",
            script="a.sh",
            script_repository={"full_name": "octo-org/hooks"},
            environment={"id": 3},
        )
        assert hook.environment.id == 3

    @pytest.mark.parametrize("repo", ["no-slash", "a/b/c", "", "a b/c"])
    def test_invalid_repository_name(self, repo):
        with pytest.raises(ValidationError):
            NewPreReceiveHook(name="check", script="a.sh", script_repository=repo, environment=1)

    def test_required_fields(self):
        with pytest.raises(ValidationError):
            NewPreReceiveHook(name="check")

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            NewPreReceiveHook(name="", script="a.sh", script_repository="o/r", environment=1)

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            NewPreReceiveHook(
                name="check", script="a.sh", script_repository="o/r", environment=1, colour="red"
            )

    def test_bool_not_taken_as_environment_id(self):
        with pytest.raises(ValidationError):
            NewPreReceiveHook(name="check", script="a.sh", script_repository="o/r", environment=True)

    def test_invalid_enforcement(self):
        with pytest.raises(ValidationError):
            NewPreReceiveHook(
                name="check", script="a.sh", script_repository="o/r", environment=1, enforcement="on"
            )


class TestUpdateModels:
    def test_update_hook_all_optional(self):
        assert UpdatePreReceiveHook().model_dump(exclude_none=True) == {}

    def test_update_hook_shorthand(self):
        update = UpdatePreReceiveHook(environment=4, script_repository="o/r")
        assert update.model_dump(exclude_none=True) == {
            "script_repository": {"full_name": "o/r"},
            "environment": {"id": 4},
        }

    def test_new_environment_requires_image_url(self):
        with pytest.raises(ValidationError):
            NewPreReceiveEnvironment(name="env")
