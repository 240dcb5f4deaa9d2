import io
import logging
from typing import List, Tuple

from PIL import Image, ImageSequence

from ...constants.stickers import ImageFormat
from ...sticker.error import ErrorCode, InvalidPackError

logger = logging.getLogger(__name__)


class ImageFile:
    def __init__(self, data: bytes):
        self.pil_image: Image.Image = Image.open(io.BytesIO(data))

    @property
    def width(self) -> int:
        return self.pil_image.size[0]

    @property
    def height(self) -> int:
        return self.pil_image.size[1]

    @property
    def format(self) -> str:
        return self.pil_image.format

    @property
    def frame_count(self) -> int:
        return getattr(self.pil_image, "n_frames", 1)

    def frame_durations(self) -> List[int]:
        durations = []
        for frame in ImageSequence.Iterator(self.pil_image):
            frame.load()  # webp only fills info["duration"] once the frame is decoded
            durations.append(frame.info.get("duration", 0))
        self.pil_image.seek(0)

        return durations

    def close(self):
        self.pil_image.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def get_image_size(data: bytes) -> Tuple[int, int]:
    """returns the (width, height) of the encoded image, raises OSError (PIL.UnidentifiedImageError)
    if Pillow can't decode it"""
    with ImageFile(data) as image:
        return image.width, image.height


class ImageInspector:
    """Codec-level checks on a sticker asset, run after the size checks.

    Subclasses raise `InvalidPackError` on the first problem found.
    """

    def inspect(self, identifier: str, file_name: str, data: bytes, animated: bool, limits):
        raise NotImplementedError


class NoopImageInspector(ImageInspector):
    def inspect(self, identifier: str, file_name: str, data: bytes, animated: bool, limits):
        pass


class WebpImageInspector(ImageInspector):
    def inspect(self, identifier: str, file_name: str, data: bytes, animated: bool, limits):
        suffix = ", sticker pack identifier: {}, filename: {}".format(identifier, file_name)

        try:
            image = ImageFile(data)
        except Image.DecompressionBombError as e:
            logger.info('sticker %s declares too many pixels: %s', file_name, str(e))
            raise InvalidPackError(
                ErrorCode.INCORRECT_IMAGE_SIZE,
                "sticker should be {}x{} pixels{}".format(limits.image_width, limits.image_height, suffix)
            )
        except (OSError, ValueError) as e:
            logger.info('cannot decode sticker %s: %s', file_name, str(e))
            raise InvalidPackError(ErrorCode.UNSUPPORTED_IMAGE_FORMAT, "Error parsing webp image" + suffix)

        with image:
            if image.format != ImageFormat.WEBP:
                raise InvalidPackError(
                    ErrorCode.UNSUPPORTED_IMAGE_FORMAT,
                    "sticker should be a webp image, current format is {}{}".format(image.format, suffix)
                )
            if image.height != limits.image_height:
                raise InvalidPackError(
                    ErrorCode.INCORRECT_IMAGE_SIZE,
                    "sticker height should be {}, current height is {}{}".format(limits.image_height, image.height, suffix)
                )
            if image.width != limits.image_width:
                raise InvalidPackError(
                    ErrorCode.INCORRECT_IMAGE_SIZE,
                    "sticker width should be {}, current width is {}{}".format(limits.image_width, image.width, suffix)
                )

            frame_count = image.frame_count
            logger.debug('%s: %d frame(s)', file_name, frame_count)

            if animated:
                if frame_count <= 1:
                    raise InvalidPackError(
                        ErrorCode.UNSUPPORTED_IMAGE_FORMAT,
                        "this pack is marked as animated sticker pack, all stickers should animate" + suffix
                    )
                durations = image.frame_durations()
                self.check_frame_durations(durations, identifier, file_name, limits)
                total_duration = sum(durations)
                if total_duration > limits.animated_total_duration_max:
                    raise InvalidPackError(
                        ErrorCode.UNSUPPORTED_IMAGE_FORMAT,
                        "sticker animation max duration is: {} ms, current duration is: {} ms{}".format(
                            limits.animated_total_duration_max, total_duration, suffix
                        )
                    )
            elif frame_count > 1:
                raise InvalidPackError(
                    ErrorCode.ANIMATED_IMAGES_NOT_SUPPORTED,
                    "this pack is not marked as animated sticker pack, all stickers should be static stickers" + suffix
                )

    @staticmethod
    def check_frame_durations(durations: List[int], identifier: str, file_name: str, limits):
        for duration in durations:
            if duration < limits.animated_frame_duration_min:
                raise InvalidPackError(
                    ErrorCode.UNSUPPORTED_IMAGE_FORMAT,
                    "animated sticker frame duration limit is {}, sticker pack identifier: {}, filename: {}".format(
                        limits.animated_frame_duration_min, identifier, file_name
                    )
                )
