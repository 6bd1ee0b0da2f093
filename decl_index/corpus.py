"""Download, unpack and locate the documentation corpus."""

import shutil
import tempfile
import time
import zipfile
from pathlib import Path, PurePosixPath
from typing import List, Optional

import httpx
import structlog

from .config import Settings
from .core.errors import CorpusError

logger = structlog.get_logger(__name__)

SNAPSHOT_RELATIVE_PATH = Path("declarations") / "declaration-data.bmp"

# Browser scripts that query this server instead of searching client-side
ASSETS_DIR = Path(__file__).parent / "static"
COMPANION_ASSETS = ("declaration-data.js", "instances.js", "importedBy.js")


def docs_root(settings: Settings) -> Path:
    """Directory holding the generated HTML docs."""
    return settings.corpus_dir / "docs"


def snapshot_path(settings: Settings) -> Path:
    """Path of the declaration document to load."""
    if settings.snapshot_path is not None:
        return settings.snapshot_path
    return docs_root(settings) / SNAPSHOT_RELATIVE_PATH


def has_docs(settings: Settings) -> bool:
    return docs_root(settings).is_dir()


async def download_archive(url: str, dest: Path, timeout: float = 300.0) -> int:
    """
    Stream an archive to disk.

    Args:
        url: Archive URL
        dest: File to write
        timeout: Request timeout in seconds

    Returns:
        Number of bytes written
    """
    written = 0
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        async with client.stream("GET", url) as resp:
            resp.raise_for_status()
            with open(dest, "wb") as f:
                async for chunk in resp.aiter_bytes():
                    f.write(chunk)
                    written += len(chunk)
    return written


def _strip_toplevel(member: str) -> Optional[PurePosixPath]:
    parts = PurePosixPath(member).parts[1:]
    if not parts:
        return None
    return PurePosixPath(*parts)


def extract_archive(archive: Path, target: Path) -> int:
    """
    Extract a zip archive, dropping its single top-level directory.

    Args:
        archive: Zip file
        target: Directory to extract into

    Returns:
        Number of files extracted

    Raises:
        CorpusError: If the archive is invalid or a member escapes target
    """
    target.mkdir(parents=True, exist_ok=True)
    root = target.resolve()
    extracted = 0

    try:
        with zipfile.ZipFile(archive) as zf:
            for info in zf.infolist():
                relative = _strip_toplevel(info.filename)
                if relative is None:
                    continue

                dest = (root / relative).resolve()
                if root != dest and root not in dest.parents:
                    raise CorpusError(f"Archive member escapes target: {info.filename}")

                if info.is_dir():
                    dest.mkdir(parents=True, exist_ok=True)
                    continue

                dest.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(info) as src, open(dest, "wb") as out:
                    shutil.copyfileobj(src, out)
                extracted += 1
    except zipfile.BadZipFile as e:
        raise CorpusError(f"Invalid docs archive {archive}: {e}") from e

    return extracted


def write_companion_assets(docs_dir: Path) -> List[Path]:
    """
    Overwrite the docs' client scripts with the server-backed versions.

    Args:
        docs_dir: Root of the generated HTML docs

    Returns:
        Paths written

    Raises:
        CorpusError: If a script cannot be written
    """
    written = []
    for filename in COMPANION_ASSETS:
        dest = docs_dir / filename
        try:
            shutil.copyfile(ASSETS_DIR / filename, dest)
        except OSError as e:
            raise CorpusError(f"Failed to replace {dest}: {e}") from e
        written.append(dest)

    logger.info("Companion assets written", directory=str(docs_dir), files=len(written))
    return written


def should_download(settings: Settings) -> bool:
    if settings.snapshot_path is not None:
        return False
    if settings.force_update:
        return True
    return not has_docs(settings) and not settings.skip_update


async def ensure_docs(settings: Settings) -> Path:
    """
    Make sure the declaration document exists, downloading the corpus if needed.

    When serving the corpus, the docs' client scripts are replaced with the
    server-backed versions.

    Returns:
        Path of the declaration document

    Raises:
        CorpusError: If the docs are missing and cannot be downloaded
    """
    if should_download(settings):
        start_time = time.time()
        with tempfile.TemporaryDirectory(prefix="decl-index") as tmp:
            archive = Path(tmp) / "docs.zip"
            logger.info("Downloading docs archive", url=settings.docs_url, dest=str(archive))
            try:
                size = await download_archive(settings.docs_url, archive, settings.download_timeout)
            except httpx.HTTPError as e:
                raise CorpusError(f"Failed to download {settings.docs_url}: {e}") from e

            logger.info("Downloaded docs archive, extracting", bytes=size)
            files = extract_archive(archive, settings.corpus_dir)

        logger.info(
            "Docs archive extracted",
            target=str(settings.corpus_dir),
            files=files,
            elapsed_ms=round((time.time() - start_time) * 1000, 2),
        )

    path = snapshot_path(settings)
    if settings.snapshot_path is None:
        if not has_docs(settings):
            raise CorpusError(
                f"Docs are not installed in {settings.corpus_dir} and downloading is disabled"
            )
        write_companion_assets(docs_root(settings))
    return path
