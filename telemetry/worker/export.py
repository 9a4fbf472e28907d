"""CSV export of telemetry readings."""

import logging
from pathlib import Path
from typing import Union

from telemetry.shared.disk_check import DiskFullError, require_disk_space
from telemetry.shared.models import Reading

logger = logging.getLogger(__name__)


class CsvExporter:
    """Exports each reading as a single-line CSV file.

    Writing is opt-in. When disabled the exporter only logs the path and
    content it would have written.
    """

    def __init__(self, out_dir: Union[str, Path] = ".", write_enabled: bool = False):
        self.out_dir = Path(out_dir)
        self.write_enabled = write_enabled

    def path_for(self, reading: Reading) -> Path:
        return self.out_dir / reading.source

    def export(self, reading: Reading) -> Path:
        """Export a reading and return the target path.

        Write failures are logged and never raised.
        """
        path = self.path_for(reading)
        content = reading.csv_line()

        if not self.write_enabled:
            logger.info(f"Simulated CSV write to {path}. Content: {content.rstrip()}")
            return path

        try:
            self.out_dir.mkdir(parents=True, exist_ok=True)
            require_disk_space(str(self.out_dir))
            path.write_text(content)
        except DiskFullError as e:
            logger.error(str(e))
        except OSError as e:
            logger.error(f"Error writing CSV file {path}: {e}")
        else:
            logger.info(f"Wrote CSV file {path}. Content: {content.rstrip()}")
        return path
