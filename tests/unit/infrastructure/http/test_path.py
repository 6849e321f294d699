"""Tests for record type to REST path resolution."""

from parse_adapter.domain.record.model import ParseModel, ParseUser, attr
from parse_adapter.infrastructure.http.path import resolve_path


class Widget(ParseModel):
    name = attr("string")


class Admin(ParseUser):
    level = attr("number")


class TestResolvePath:
    def test_models_map_to_classes(self) -> None:
        assert resolve_path(Widget) == "classes/Widget"

    def test_custom_classes_path(self) -> None:
        assert resolve_path(Widget, classes_path="objects") == "objects/Widget"

    def test_users_endpoint(self) -> None:
        assert resolve_path(ParseUser) == "users"

    def test_user_subclasses_use_users_endpoint(self) -> None:
        assert resolve_path(Admin) == "users"

    def test_login_endpoint(self) -> None:
        assert resolve_path("login") == "login"

    def test_password_reset_endpoint(self) -> None:
        assert resolve_path("requestPasswordReset") == "requestPasswordReset"

    def test_registered_type_key(self) -> None:
        assert resolve_path("widget") == "classes/Widget"
        assert resolve_path("user") == "users"

    def test_unregistered_type_key_is_capitalized(self) -> None:
        assert resolve_path("gameScore") == "classes/GameScore"
