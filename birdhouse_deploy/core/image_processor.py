"""Image compression and icon generation"""

import logging
from pathlib import Path
from typing import List, Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from ..constants import (
    APP_ICON_SIZES,
    ErrorCode,
    IMAGE_COMPRESS_QUALITY,
    IMAGE_COMPRESS_WIDTH,
    IMAGE_EXTENSIONS,
)
from ..models.result import ImageReport
from ..utils.async_utils import run_blocking
from ..utils.file_utils import walk_files

logger = logging.getLogger(__name__)

IMAGE_ERRORS = (OSError, ValueError, UnidentifiedImageError)


def _to_rgb(image: Image.Image) -> Image.Image:
    """Flatten transparency onto white for formats without alpha"""
    if image.mode in ('RGBA', 'LA', 'P'):
        rgba = image.convert('RGBA')
        background = Image.new('RGB', rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[3])
        return background
    if image.mode != 'RGB':
        return image.convert('RGB')
    return image


def compress_image(source: Path, target: Path,
                   width: int = IMAGE_COMPRESS_WIDTH,
                   quality: int = IMAGE_COMPRESS_QUALITY) -> None:
    """Resize ``source`` to ``width`` pixels wide and write it to ``target``

    The aspect ratio is kept. JPEG files are re-encoded at ``quality``,
    PNG files are written optimized.
    """
    with Image.open(source) as original:
        image = ImageOps.exif_transpose(original)
        height = max(1, round(image.height * width / image.width))
        image = image.resize((width, height), Image.Resampling.LANCZOS)

        target.parent.mkdir(parents=True, exist_ok=True)
        if target.suffix.lower() in ('.jpg', '.jpeg'):
            _to_rgb(image).save(target, 'JPEG', quality=quality, optimize=True)
        else:
            image.save(target, 'PNG', optimize=True)


def resize_square(source: Path, target: Path, size: int) -> None:
    """Crop-to-fit ``source`` into a ``size`` x ``size`` PNG"""
    with Image.open(source) as original:
        image = ImageOps.fit(original.convert('RGBA'), (size, size), Image.Resampling.LANCZOS)
        target.parent.mkdir(parents=True, exist_ok=True)
        image.save(target, 'PNG')


def write_ico(source: Path, target: Path, sizes: List[int]) -> None:
    """Write a multi-resolution ICO of ``source``"""
    with Image.open(source) as original:
        image = ImageOps.fit(
            original.convert('RGBA'), (max(sizes), max(sizes)), Image.Resampling.LANCZOS
        )
        target.parent.mkdir(parents=True, exist_ok=True)
        image.save(target, 'ICO', sizes=[(s, s) for s in sizes])


class ImageProcessor:
    """Compresses uploaded images and generates favicons and icons

    Pillow runs in the default executor. Failures of single files are logged
    and collected in the returned :class:`ImageReport`.
    """

    def __init__(self, project_root: Path):
        self.project_root = project_root

    def _relative(self, path: Path) -> str:
        try:
            return path.relative_to(self.project_root).as_posix()
        except ValueError:
            return path.as_posix()

    async def compress_directory(self, source_dir: Path, target_dir: Path) -> ImageReport:
        """Compress every image below ``source_dir`` into ``target_dir``

        Images whose compressed copy is newer than the source are skipped.

        Args:
            source_dir: Directory of original images
            target_dir: Directory mirrored with compressed copies

        Returns:
            Report of processed, skipped and failed files
        """
        report = ImageReport()

        if not source_dir.is_dir():
            logger.warning(f"Uncompressed image directory not found: {source_dir}")
            return report.finalize()

        for source in walk_files(source_dir):
            if source.suffix.lower() not in IMAGE_EXTENSIONS:
                continue

            relative = self._relative(source)
            target = target_dir / source.relative_to(source_dir)

            if target.exists() and target.stat().st_mtime >= source.stat().st_mtime:
                report.skipped.append(relative)
                continue

            try:
                await run_blocking(compress_image, source, target)
            except IMAGE_ERRORS as e:
                logger.error(f"Error compressing {relative}: {e}")
                report.add_error(ErrorCode.IMAGE_FAILED, str(e), path=relative)
                continue

            report.processed.append(relative)
            logger.info(f"Compressed {relative} -> {self._relative(target)}")

        logger.info(
            f"Compressed {len(report.processed)} images, "
            f"{len(report.skipped)} up to date, {len(report.errors)} failed"
        )
        return report.finalize()

    async def generate_sizes(self, source: Optional[Path], out_dir: Optional[Path],
                             name: Optional[str], sizes: List[int]) -> ImageReport:
        """Write ``<name>-<s>x<s>.png`` for every size

        Args:
            source: Original image
            out_dir: Output directory, created when missing
            name: Base file name
            sizes: Edge lengths in pixels

        Returns:
            Report of generated and failed sizes
        """
        report = ImageReport()

        if not source or not out_dir or not name:
            logger.warning("Image source, output directory or file name missing. Skipping generation.")
            return report.finalize()

        if not source.is_file():
            logger.warning(f"Original image not found: {source}. Skipping generation.")
            report.add_warning(f"Original image not found: {source}")
            return report.finalize()

        out_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Generating {len(sizes)} \"{name}\" images")

        for size in sizes:
            target = out_dir / f"{name}-{size}x{size}.png"
            try:
                await run_blocking(resize_square, source, target, size)
            except IMAGE_ERRORS as e:
                logger.error(f"Error resizing image to {size}x{size}: {e}")
                report.add_error(ErrorCode.IMAGE_FAILED, str(e), path=self._relative(target))
                continue
            report.processed.append(self._relative(target))

        return report.finalize()

    async def generate_app_icon(self, source: Path, out_dir: Path) -> ImageReport:
        """Write a multi-resolution ``<stem>.ico`` of ``source`` into ``out_dir``"""
        report = ImageReport()

        if not source.is_file():
            logger.warning(f"App icon source not found: {source}. Skipping generation.")
            report.add_warning(f"App icon source not found: {source}")
            return report.finalize()

        target = out_dir / f"{source.stem}.ico"
        try:
            await run_blocking(write_ico, source, target, APP_ICON_SIZES)
        except IMAGE_ERRORS as e:
            logger.error(f"Error generating ICO: {e}")
            report.add_error(ErrorCode.IMAGE_FAILED, str(e), path=self._relative(target))
        else:
            report.processed.append(self._relative(target))
            logger.info(f"Generated {self._relative(target)}")

        return report.finalize()
