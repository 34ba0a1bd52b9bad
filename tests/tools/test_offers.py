"""Tests for the offer tools"""

import pytest

from target_mcp.tools.offers import (
    CreateJsonOfferArguments,
    CreateOfferArguments,
    ListOffersArguments,
    OfferIdArguments,
    UpdateOfferArguments,
    create_json_offer,
    create_offer,
    get_offer,
    list_offers,
    update_offer,
)


class TestReadOffers:
    @pytest.mark.asyncio
    async def test_list_offers(self, context, fake_api):
        await list_offers(ListOffersArguments(limit=10), context)

        request = fake_api.last_request
        assert request.url.raw_path == b"/acme/target/offers?limit=10"
        assert request.headers["Accept"] == "application/vnd.adobe.target.v2+json"

    @pytest.mark.asyncio
    async def test_get_offer(self, context, fake_api):
        await get_offer(OfferIdArguments(id=3), context)

        request = fake_api.last_request
        assert request.url.path == "/acme/target/offers/content/3"
        assert request.headers["Accept"] == "application/vnd.adobe.target.v1+json"


class TestCreateOffers:
    @pytest.mark.asyncio
    async def test_create_offer(self, context, fake_api):
        fake_api.respond(201, {"id": 42})

        result = await create_offer(CreateOfferArguments(name="Promo", content="<div>Hi</div>"), context)

        assert result == {"id": 42}
        request = fake_api.last_request
        assert request.method == "POST"
        assert request.url.path == "/acme/target/offers/content"
        assert request.headers["Content-Type"] == "application/vnd.adobe.target.v2+json"
        assert fake_api.body() == {"name": "Promo", "content": "<div>Hi</div>"}

    @pytest.mark.asyncio
    async def test_create_offer_uses_configured_workspace(self, make_context, conversion_config, fake_api):
        await create_offer(CreateOfferArguments(name="Promo", content="x"), make_context(conversion_config))

        assert fake_api.body()["workspace"] == "1234567"

    @pytest.mark.asyncio
    async def test_explicit_workspace_wins(self, make_context, conversion_config, fake_api):
        args = CreateOfferArguments(name="Promo", content="x", workspace="555")

        await create_offer(args, make_context(conversion_config))

        assert fake_api.body()["workspace"] == "555"

    @pytest.mark.asyncio
    async def test_create_json_offer(self, context, fake_api):
        args = CreateJsonOfferArguments(name="Flags", content={"newCheckout": True})

        await create_json_offer(args, context)

        request = fake_api.last_request
        assert request.url.path == "/acme/target/offers/json"
        assert fake_api.body() == {"name": "Flags", "content": {"newCheckout": True}}


class TestUpdateOffer:
    @pytest.mark.asyncio
    async def test_update_name_only(self, context, fake_api):
        await update_offer(UpdateOfferArguments(id=8, name="Renamed"), context)

        request = fake_api.last_request
        assert request.method == "PUT"
        assert request.url.path == "/acme/target/offers/content/8"
        assert fake_api.body() == {"name": "Renamed"}

    @pytest.mark.asyncio
    async def test_update_content(self, context, fake_api):
        await update_offer(UpdateOfferArguments(id=8, name="Renamed", content="<p>new</p>"), context)

        assert fake_api.body() == {"name": "Renamed", "content": "<p>new</p>"}
