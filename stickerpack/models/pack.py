from typing import List, Optional

from ..constants.stickers import HandlePrefix
from ..utils import utils


def image_from_asset(path: str) -> str:
    return HandlePrefix.ASSET + path


def image_from_file(path: str) -> str:
    return HandlePrefix.FILE + path


class Sticker:
    def __init__(self, image_file_name: str, emojis: Optional[List[str]] = None):
        self.image_file_name = image_file_name
        self.emojis = list(emojis) if emojis else []

    @classmethod
    def from_text(cls, image_file_name: str, text: str):
        """emojis are extracted from free text, everything else in `text` is ignored"""
        return cls(image_file_name, utils.get_emojis(text, as_list=True))

    @classmethod
    def from_dict(cls, data: dict):
        return cls(data.get('image_file', ''), data.get('emojis') or [])

    def get_emojis_str(self) -> str:
        return "".join(self.emojis)

    def to_payload(self) -> dict:
        return {"path": self.image_file_name, "emojis": list(self.emojis)}

    def __repr__(self):
        return 'Sticker({!r}, emojis={})'.format(self.image_file_name, self.get_emojis_str())


class StickerPack:
    def __init__(
            self,
            identifier: str,
            name: str,
            publisher: str,
            tray_image_file: str,
            stickers: Optional[List[Sticker]] = None,
            animated_sticker_pack: bool = False,
            publisher_email: Optional[str] = None,
            publisher_website: Optional[str] = None,
            privacy_policy_website: Optional[str] = None,
            license_agreement_website: Optional[str] = None,
            android_play_store_link: Optional[str] = None,
            ios_app_store_link: Optional[str] = None,
            image_data_version: str = "1"
    ):
        self.identifier = identifier
        self.name = name
        self.publisher = publisher
        self.tray_image_file = tray_image_file
        self.stickers: List[Sticker] = list(stickers) if stickers else []
        self.animated_sticker_pack = animated_sticker_pack
        self.publisher_email = publisher_email
        self.publisher_website = publisher_website
        self.privacy_policy_website = privacy_policy_website
        self.license_agreement_website = license_agreement_website
        self.android_play_store_link = android_play_store_link
        self.ios_app_store_link = ios_app_store_link
        self.image_data_version = image_data_version

    @classmethod
    def from_dict(cls, data: dict, android_play_store_link=None, ios_app_store_link=None):
        """Build a pack from one entry of a contents.json `sticker_packs` list. The store
        links live at the top level of that file, so they are passed separately"""
        return cls(
            identifier=data.get('identifier', ''),
            name=data.get('name', ''),
            publisher=data.get('publisher', ''),
            tray_image_file=data.get('tray_image_file', ''),
            stickers=[Sticker.from_dict(s) for s in data.get('stickers') or []],
            animated_sticker_pack=bool(data.get('animated_sticker_pack', False)),
            publisher_email=data.get('publisher_email'),
            publisher_website=data.get('publisher_website'),
            privacy_policy_website=data.get('privacy_policy_website'),
            license_agreement_website=data.get('license_agreement_website'),
            android_play_store_link=android_play_store_link,
            ios_app_store_link=ios_app_store_link,
            image_data_version=str(data.get('image_data_version', '1'))
        )

    def type_str(self) -> str:
        return "animated" if self.animated_sticker_pack else "static"

    def add_sticker(self, image_file_name: str, emojis: List[str]):
        self.stickers.append(Sticker(image_file_name, emojis))

    def to_payload(self, image_data_version: Optional[str] = None) -> dict:
        return {
            "identifier": self.identifier,
            "name": self.name,
            "publisher": self.publisher,
            "trayImageFileName": self.tray_image_file,
            "publisherWebsite": self.publisher_website,
            "privacyPolicyWebsite": self.privacy_policy_website,
            "licenseAgreementWebsite": self.license_agreement_website,
            "imageDataVersion": image_data_version or self.image_data_version,
            "animatedStickerPack": self.animated_sticker_pack,
            "stickers": [sticker.to_payload() for sticker in self.stickers]
        }

    def __repr__(self):
        return 'StickerPack({!r}, {} stickers, type: {})'.format(self.identifier, len(self.stickers), self.type_str())
