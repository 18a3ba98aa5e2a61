"""
Export service for SiteCraft: zip packaging of generated code
"""
import io
import zipfile
from typing import Optional
import logging

from models.generation import GeneratedCode

logger = logging.getLogger(__name__)

ARCHIVE_FILENAME = "website.zip"
ARCHIVE_CONTENT_TYPE = "application/zip"


class ExportService:
    def __init__(self):
        self.entries = {
            "index.html": lambda code: code.html,
            "style.css": lambda code: code.css,
            "script.js": lambda code: code.javascript,
        }

    def build_archive(self, code: Optional[GeneratedCode]) -> Optional[bytes]:
        """
        Package the generated code as a zip.

        Returns None when there is no code or the archive cannot be built.
        """
        if code is None:
            return None

        try:
            output = io.BytesIO()
            with zipfile.ZipFile(output, "w", zipfile.ZIP_DEFLATED) as archive:
                for name, field in self.entries.items():
                    archive.writestr(name, field(code) or "")
            data = output.getvalue()
            logger.info(f"Built {ARCHIVE_FILENAME} ({len(data)} bytes)")
            return data

        except Exception as e:
            logger.error(f"Error creating zip file: {str(e)}", exc_info=True)
            return None

    def get_content_disposition(self) -> str:
        return f'attachment; filename="{ARCHIVE_FILENAME}"'
