import asyncio
import logging
from pathlib import Path

from fastapi import HTTPException, UploadFile

from sigil.core.config import settings
from sigil.core.file_reader import MissingExtension, declared_type_from_name, read_header
from sigil.core.signature_index import SignatureIndex
from sigil.core.verifier import Classification, Verdict, Verifier
from sigil.schemas.verification import (
    FileStatus,
    FileVerificationResponse,
    VerificationReport,
)

logger = logging.getLogger(__name__)

_STATUS_BY_VERDICT = {
    Verdict.CONFIRMED: FileStatus.CORRECT,
    Verdict.MISMATCH: FileStatus.INCORRECT,
    Verdict.UNKNOWN: FileStatus.UNKNOWN,
}


def resolve_paths(folder: Path, recursive: bool = False) -> list[Path]:
    """Regular files directly inside `folder`, or anywhere below it when recursive."""
    entries = folder.rglob("*") if recursive else folder.iterdir()
    return sorted(p for p in entries if p.is_file())


def _to_response(path: str, classification: Classification) -> FileVerificationResponse:
    return FileVerificationResponse(
        path=path,
        status=_STATUS_BY_VERDICT[classification.verdict],
        declared_type=classification.declared_type,
        detected_type=classification.detected_type,
        matched_length=classification.matched_length or None,
    )


class VerificationService:
    """
    Checks files against a shared, read-only SignatureIndex.

    The index is built once and injected, so many files (or requests)
    reuse the same lookup structure.
    """

    def __init__(
        self,
        index: SignatureIndex,
        max_workers: int | None = None,
    ) -> None:
        self.index = index
        self.verifier = Verifier(index)
        self.max_workers = max(1, max_workers or settings.MAX_WORKERS)

    def verify_bytes(self, filename: str, contents: bytes) -> FileVerificationResponse:
        """Verify in-memory content whose name declares its type."""
        declared_type = declared_type_from_name(filename)
        header = contents[: self.index.required_header_length]
        result = _to_response(filename, self.verifier.verify(declared_type, header))
        if result.status == FileStatus.INCORRECT:
            logger.info(
                "%s: declared as %s, detected %s",
                filename,
                declared_type,
                result.detected_type,
            )
        return result

    def verify_file(self, path: str | Path) -> FileVerificationResponse:
        """
        Verify one file on disk. Problems with the file itself are
        reported as an ERROR result, never raised.
        """
        path = Path(path)
        if not path.is_file():
            return FileVerificationResponse(
                path=str(path),
                status=FileStatus.ERROR,
                error_message="The provided path is not a file.",
            )

        # ── Declared Type + Header ────────────────────────
        try:
            declared_type = declared_type_from_name(path)
            header = read_header(path, self.index.required_header_length)
        except (MissingExtension, OSError) as e:
            logger.warning("Cannot verify %s: %s", path, e)
            return FileVerificationResponse(
                path=str(path),
                status=FileStatus.ERROR,
                error_message=str(e),
            )

        result = _to_response(str(path), self.verifier.verify(declared_type, header))
        if result.status == FileStatus.INCORRECT:
            logger.info(
                "%s: declared as %s, detected %s",
                path,
                declared_type,
                result.detected_type,
            )
        return result

    async def verify_path(
        self,
        path: str | Path,
        recursive: bool = False,
    ) -> VerificationReport:
        """
        Verify a single file, or every file of a directory.
        Directory entries are read concurrently in worker threads.
        """
        path = Path(path)
        if not path.is_dir():
            result = await asyncio.to_thread(self.verify_file, path)
            return VerificationReport.from_results([result])

        try:
            paths = await asyncio.to_thread(resolve_paths, path, recursive)
        except OSError as e:
            logger.error("Cannot list directory %s: %s", path, e)
            return VerificationReport.from_results([
                FileVerificationResponse(
                    path=str(path),
                    status=FileStatus.ERROR,
                    error_message=str(e),
                )
            ])
        logger.info("Verifying %d files under %s", len(paths), path)

        semaphore = asyncio.Semaphore(self.max_workers)

        async def _verify(file_path: Path) -> FileVerificationResponse:
            async with semaphore:
                return await asyncio.to_thread(self.verify_file, file_path)

        results = await asyncio.gather(*(_verify(p) for p in paths))
        return VerificationReport.from_results(list(results))

    async def verify_upload(self, file: UploadFile) -> FileVerificationResponse:
        # ── Validation ────────────────────────────────────
        if not file.filename:
            raise HTTPException(
                status_code=400,
                detail="No filename provided",
            )

        try:
            declared_type_from_name(file.filename)
        except MissingExtension:
            raise HTTPException(
                status_code=400,
                detail=f"File '{file.filename}' has no extension "
                "to verify against",
            )

        contents: bytes = await file.read()
        size_mb: float = len(contents) / (1024 * 1024)
        if size_mb > settings.MAX_UPLOAD_SIZE_MB:
            raise HTTPException(
                status_code=400,
                detail=f"File too large: {size_mb:.1f}MB. "
                f"Max: {settings.MAX_UPLOAD_SIZE_MB}MB",
            )

        return self.verify_bytes(file.filename, contents)
