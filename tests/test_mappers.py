"""
Tests for the entity mappers (row -> API and API -> columns).
"""

import pytest

from entities import MAPPERS, get_mapper, map_api_to_db, map_row_to_api
from entities.fields import decode_json, to_flag
from entities.schemas import ArticlePayload, ProfilePayload, UserPayload


class TestToApi:
    def test_current_column_wins_over_legacy(self):
        row = {"id": 1, "avatar_url": "new.png", "avatarUrl": "old.png"}
        assert map_row_to_api("user", row)["avatarUrl"] == "new.png"

    def test_legacy_column_used_when_current_missing(self):
        row = {"id": 1, "avatarUrl": "old.png", "phoneNumber": "0812"}
        api = map_row_to_api("user", row)
        assert api["avatarUrl"] == "old.png"
        assert api["phoneNumber"] == "0812"

    def test_null_current_falls_through_to_legacy(self):
        row = {"id": 1, "avatar_url": None, "avatarUrl": "old.png"}
        assert map_row_to_api("user", row)["avatarUrl"] == "old.png"

    @pytest.mark.parametrize(
        "stored, expected",
        [(True, 1), (False, 0), (1, 1), (0, 0), (5, 1), ("1", 1), ("0", 0), ("true", 1), ("nope", 0), (None, 0)],
    )
    def test_verified_flag_is_always_zero_or_one(self, stored, expected):
        assert map_row_to_api("user", {"id": 1, "is_verified": stored})["isVerified"] == expected
        assert map_row_to_api("user", {"id": 1, "isVerified": stored})["isVerified"] == expected

    def test_article_cover_resolves_through_every_historical_name(self):
        for column in ("cover_image_url", "coverImageUrl", "imageUrl", "image_url"):
            api = map_row_to_api("article", {"id": 7, column: "cover.jpg"})
            assert api["coverImageUrl"] == "cover.jpg"
            assert api["imageUrl"] == "cover.jpg"

    def test_article_cover_priority(self):
        row = {"id": 7, "imageUrl": "third.jpg", "coverImageUrl": "second.jpg", "cover_image_url": "first.jpg"}
        assert map_row_to_api("article", row)["coverImageUrl"] == "first.jpg"

    @pytest.mark.parametrize("kind", sorted(MAPPERS))
    def test_empty_row_never_raises_and_uses_defaults(self, kind):
        api = map_row_to_api(kind, {})
        assert isinstance(api, dict)

    def test_user_defaults(self):
        api = map_row_to_api("user", {})
        assert api == {
            "id": None,
            "name": None,
            "email": None,
            "password": None,
            "role": None,
            "avatarUrl": None,
            "isVerified": 0,
            "phoneNumber": None,
            "mediaName": None,
            "position": None,
            "ukwCertification": None,
        }

    def test_none_row_maps_to_none(self):
        assert map_row_to_api("user", None) is None

    def test_contact_info_shape(self):
        row = {
            "id": 1,
            "organizationName": "Org",
            "address": None,
            "email": "info@example.org",
            "phone": "",
            "socials": '{"facebook": "fb"}',
            "site_logo": "logo.png",
        }
        assert map_row_to_api("contact_info", row) == {
            "organizationName": "Org",
            "address": "",
            "email": "info@example.org",
            "phone": "",
            "siteLogo": "logo.png",
            "faviconUrl": "",
            "socials": {"facebook": "fb"},
        }

    def test_profile_mission_not_json_becomes_empty_list(self):
        api = map_row_to_api("site_profile", {"mission": "not-json"})
        assert api["mission"] == []

    def test_deeply_nested_json_falls_back_to_defaults(self):
        api = map_row_to_api("site_profile", {"mission": "[" * 100000})
        assert api["mission"] == []

        contact = map_row_to_api("contact_info", {"socials": "{\"a\": " * 100000})
        assert contact["socials"] == {}

    def test_profile_shape(self):
        row = {
            "about": "About",
            "mission": '["one", "two"]',
            "legality_text": "Registered",
            "legality_sk": "SK-1",
            "ad_art": "Bylaws",
        }
        assert map_row_to_api("site_profile", row) == {
            "about": "About",
            "vision": "",
            "mission": ["one", "two"],
            "purpose": "",
            "legality": {"text": "Registered", "sk": "SK-1"},
            "adArt": "Bylaws",
        }

    def test_gallery_legacy_names(self):
        row = {"id": 3, "album": "Trip", "image_url": "a.jpg", "caption": "Fun"}
        assert map_row_to_api("gallery", row) == {"id": 3, "title": "Trip", "imageUrl": "a.jpg", "description": "Fun"}

    def test_partner_website_url_alias(self):
        assert map_row_to_api("partner", {"id": 1, "websiteUrl": "https://x"})["link"] == "https://x"


class TestToDb:
    def test_absent_fields_are_omitted(self):
        assert map_api_to_db("user", {"name": "Ann"}) == {"name": "Ann"}

    def test_empty_payload_gives_empty_dict(self):
        assert map_api_to_db("user", {}) == {}
        assert map_api_to_db("user", None) == {}

    def test_explicit_null_is_kept(self):
        assert map_api_to_db("user", {"phoneNumber": None}) == {"phone_number": None}

    def test_unknown_fields_are_dropped(self):
        assert map_api_to_db("structure", {"name": "A", "shoeSize": 42}) == {"name": "A"}

    def test_override_field_beats_general_field(self):
        payload = {"avatarUrl": "general.png", "formalPhotoUrl": "formal.png"}
        assert map_api_to_db("user", payload) == {"avatar_url": "formal.png"}

    def test_null_override_falls_back_to_general_field(self):
        payload = {"avatarUrl": "general.png", "formalPhotoUrl": None}
        assert map_api_to_db("user", payload) == {"avatar_url": "general.png"}

    def test_article_cover_sources(self):
        assert map_api_to_db("article", {"imageUrl": "b.jpg"}) == {"cover_image_url": "b.jpg"}
        assert map_api_to_db("article", {"coverImageUrl": "a.jpg", "imageUrl": "b.jpg"}) == {"cover_image_url": "a.jpg"}
        assert map_api_to_db("article", {"coverImageUrl": None}) == {"cover_image_url": None}

    def test_verified_flag_is_coerced(self):
        assert map_api_to_db("user", {"isVerified": True}) == {"is_verified": 1}
        assert map_api_to_db("user", {"isVerified": "0"}) == {"is_verified": 0}

    def test_id_passes_through(self):
        assert map_api_to_db("partner", {"id": 4, "logoUrl": "l.png"}) == {"logo_url": "l.png", "id": 4}

    def test_profile_nested_legality_is_flattened(self):
        db = map_api_to_db("site_profile", {"legality": {"sk": "SK-2"}, "mission": ["a"]})
        assert db == {"mission": '["a"]', "legality_sk": "SK-2"}

    def test_contact_socials_are_encoded(self):
        assert map_api_to_db("contact_info", {"socials": {"x": "y"}}) == {"socials": '{"x": "y"}'}

    def test_pydantic_payload_keeps_presence(self):
        payload = UserPayload.model_validate({"email": "a@b.c", "phoneNumber": None})
        assert map_api_to_db("user", payload.present()) == {"email": "a@b.c", "phone_number": None}

    def test_pydantic_nested_payload(self):
        payload = ProfilePayload.model_validate({"legality": {"text": "T"}})
        assert map_api_to_db("site_profile", payload.present()) == {"legality_text": "T"}

    def test_pydantic_article_ignores_unknown_fields(self):
        payload = ArticlePayload.model_validate({"title": "T", "views": 10})
        assert map_api_to_db("article", payload.present()) == {"title": "T"}


ROWS = {
    "user": {"id": 1, "name": "A", "avatarUrl": "a.png", "isVerified": "1", "ukw_certification": "Junior"},
    "article": {"id": 2, "title": "T", "imageUrl": "c.jpg", "author_id": 5, "editorFeedback": "fix"},
    "partner": {"id": 3, "name": "P", "logoUrl": "l.png", "websiteUrl": "https://p"},
    "structure": {"id": 4, "name": "S", "photoUrl": "s.png"},
    "gallery": {"id": 5, "album": "G", "image_url": "g.jpg"},
    "notification": {"id": 6, "user_id": 2, "is_read": True, "message": "hi"},
    "comment": {"id": 7, "user_id": 2, "articleId": 1, "content": "c"},
    "contact_info": {"organizationName": "O", "socials": "{broken", "site_logo": "logo.png"},
    "site_profile": {"mission": "not-json", "legality_text": "L"},
    "legal_content": {"id": 8, "page_key": "terms", "title": "Terms"},
}


@pytest.mark.parametrize("kind", sorted(ROWS))
def test_round_trip_is_idempotent(kind):
    mapper = get_mapper(kind)
    api = mapper.to_api(ROWS[kind])
    assert mapper.to_api(mapper.to_db(api)) == api


def test_unknown_kind():
    with pytest.raises(KeyError):
        get_mapper("spaceship")


def test_decode_json_defaults():
    assert decode_json(None, []) == []
    assert decode_json("{bad", {}) == {}
    assert decode_json([1], []) == [1]
    assert decode_json(b'{"a": 1}', {}) == {"a": 1}


def test_to_flag_bytes():
    assert to_flag(b"1") == 1
