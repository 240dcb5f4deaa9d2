from .pack import StickerPack, Sticker, image_from_asset, image_from_file
