"""
Video Metadata Extractors.

OpenCV-based probing of local video files before they are published.
"""

import asyncio
import logging
from pathlib import Path

import cv2

from ..domain.interfaces import MetadataExtractor


class OpenCVMetadataExtractor(MetadataExtractor):
    """OpenCV-based metadata extractor"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    async def probe_duration(self, file_path: Path) -> float:
        # OpenCV blocks, keep it off the event loop
        return await asyncio.get_running_loop().run_in_executor(None, self._probe_duration_sync, Path(file_path))

    def _probe_duration_sync(self, file_path: Path) -> float:
        cap = None
        try:
            cap = cv2.VideoCapture(str(file_path))

            if not cap.isOpened():
                self.logger.warning(f"Could not open video file: {file_path}")
                return 0.0

            fps = cap.get(cv2.CAP_PROP_FPS)
            frame_count = cap.get(cv2.CAP_PROP_FRAME_COUNT)
            if fps <= 0 or frame_count <= 0:
                self.logger.warning(f"No frame rate or frame count for {file_path}, duration unknown")
                return 0.0

            # Whole seconds, like the durations the remote service reports
            return float(int(frame_count / fps))

        except cv2.error as e:
            self.logger.warning(f"Could not probe {file_path}: {e}")
            return 0.0

        finally:
            if cap is not None:
                cap.release()
