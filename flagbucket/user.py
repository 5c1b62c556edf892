"""User and platform data seen by the segmentation filters."""

from dataclasses import dataclass, field, replace
from typing import Any


@dataclass
class PlatformData:
    """Details of the platform an SDK runs on."""

    platform: str = ""
    platform_version: str = ""
    sdk_type: str = ""
    sdk_version: str = ""
    hostname: str = ""


@dataclass
class User:
    """A user as supplied by the caller."""

    user_id: str = ""
    email: str = ""
    name: str = ""
    language: str = ""
    country: str = ""
    app_version: str = ""
    app_build: float = 0.0
    device_model: str = ""
    custom_data: dict[str, Any] | None = None
    private_custom_data: dict[str, Any] | None = None

    def populate(self, platform_data: PlatformData | None) -> "PopulatedUser":
        """Return a copy of this user joined with the given platform data."""
        copy = replace(
            self,
            custom_data=dict(self.custom_data) if self.custom_data is not None else None,
            private_custom_data=(
                dict(self.private_custom_data)
                if self.private_custom_data is not None
                else None
            ),
        )
        return PopulatedUser(user=copy, platform_data=platform_data or PlatformData())


@dataclass
class PopulatedUser:
    """A user together with the platform data it is evaluated against."""

    user: User = field(default_factory=User)
    platform_data: PlatformData = field(default_factory=PlatformData)

    @property
    def user_id(self) -> str:
        return self.user.user_id

    @property
    def email(self) -> str:
        return self.user.email

    @property
    def country(self) -> str:
        return self.user.country

    @property
    def app_version(self) -> str:
        return self.user.app_version

    @property
    def device_model(self) -> str:
        return self.user.device_model

    @property
    def platform(self) -> str:
        return self.platform_data.platform

    @property
    def platform_version(self) -> str:
        return self.platform_data.platform_version

    @property
    def custom_data(self) -> dict[str, Any] | None:
        return self.user.custom_data

    @property
    def private_custom_data(self) -> dict[str, Any] | None:
        return self.user.private_custom_data

    def combined_custom_data(self) -> dict[str, Any]:
        """Private custom data overlaid by public custom data."""
        return {**(self.user.private_custom_data or {}), **(self.user.custom_data or {})}

    def merge_client_custom_data(self, data: dict[str, Any] | None) -> None:
        """Add client-wide custom data for keys the user does not set itself."""
        if not data:
            return
        custom = self.user.custom_data if self.user.custom_data is not None else {}
        private = self.user.private_custom_data or {}
        for key, value in data.items():
            if key not in custom and key not in private:
                custom[key] = value
        self.user.custom_data = custom