"""Tests for the composite modification tool"""

import pytest
from pydantic import ValidationError

from target_mcp.services.error_handler import TargetAPIError
from target_mcp.tools.custom import (
    CreateActivityFromModificationsArguments,
    create_activity_from_modifications,
    lint_modifications,
)


def make_args(**overrides):
    data = {
        "name": "Hero swap",
        "url": "https://www.example.com/home",
        "modifications": "document.querySelector('#hero h1').textContent = 'Hello';",
    }
    data.update(overrides)
    return CreateActivityFromModificationsArguments.model_validate(data)


class TestLintModifications:
    def test_clean_code(self):
        assert lint_modifications("document.querySelector('#hero').remove();") == []

    def test_broad_selector(self):
        warnings = lint_modifications('document.querySelector("div").remove();')

        assert len(warnings) == 1
        assert "'div'" in warnings[0]

    def test_query_selector_all_without_iteration(self):
        warnings = lint_modifications("document.querySelectorAll('.tile').style = 'none';")

        assert warnings == [
            "WARNING: querySelectorAll used without iteration - this may not modify elements as expected"
        ]
        assert lint_modifications("document.querySelectorAll('.tile').forEach(t => t.remove());") == []


class TestArguments:
    def test_invalid_url(self):
        with pytest.raises(ValidationError):
            make_args(url="not a url")

    def test_audience_ids_alias(self):
        assert make_args(audienceIds=[1, 2]).audience_ids == [1, 2]
        assert make_args().audience_ids == []


class TestCreateActivityFromModifications:
    @pytest.mark.asyncio
    async def test_creates_offer_then_activity(self, make_context, conversion_config, fake_api):
        fake_api.respond(201, {"id": 42})
        fake_api.respond(201, {"id": 900, "state": "saved"})

        result = await create_activity_from_modifications(make_args(audienceIds=[11]), make_context(conversion_config))

        offer_request, activity_request = fake_api.requests
        assert offer_request.url.path == "/acme/target/offers/content"
        assert offer_request.headers["Accept"] == "application/vnd.adobe.target.v2+json"
        offer_body = fake_api.body(0)
        assert offer_body["name"] == "Hero swap - Modifications"
        assert offer_body["content"].startswith("<script>") and offer_body["content"].endswith("</script>")

        assert activity_request.url.path == "/acme/target/activities/xt"
        assert activity_request.headers["Accept"] == "application/vnd.adobe.target.v3+json"
        activity = fake_api.body(1)
        assert activity["state"] == "saved"
        assert activity["priority"] == 7
        assert activity["workspace"] == "1234567"
        experience = activity["locations"]["mboxes"][0]["experiences"][0]
        assert activity["locations"]["mboxes"][0]["name"] == "target-global-mbox"
        assert experience["audienceIds"] == [11]
        assert experience["options"] == [{"offerId": 42}]

        assert result["id"] == 900
        assert result["offerCreated"] == {"id": 42, "name": "Hero swap - Modifications"}
        assert "validationWarnings" not in result
        assert result["instructions"][0] == 'Activity "Hero swap" created successfully in DRAFT mode'
        assert "(IDs: 11)" in result["instructions"][3]

    @pytest.mark.asyncio
    async def test_warnings_are_reported(self, context, fake_api):
        fake_api.respond(201, {"id": 1})
        fake_api.respond(201, {"id": 2})
        args = make_args(modifications="document.querySelector('a').remove();", priority=0)

        result = await create_activity_from_modifications(args, context)

        assert fake_api.body(1)["priority"] == 0
        assert "workspace" not in fake_api.body(1)
        assert len(result["validationWarnings"]) == 1
        assert result["instructions"][0] == "VALIDATION WARNINGS DETECTED - Review before activating:"
        assert result["instructions"][2] == ""
        assert "All Visitors" in result["instructions"][6]

    @pytest.mark.asyncio
    async def test_activity_failure_leaves_offer(self, context, fake_api):
        """Test a failed activity step raises after the offer was already created"""
        fake_api.respond(201, {"id": 42})
        fake_api.respond(500, {"message": "boom"})

        with pytest.raises(TargetAPIError) as exc_info:
            await create_activity_from_modifications(make_args(), context)

        assert exc_info.value.status_code == 500
        assert len(fake_api.requests) == 2
        assert fake_api.requests[0].url.path == "/acme/target/offers/content"
