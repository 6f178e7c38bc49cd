import logging
from pathlib import Path
from urllib.error import URLError

import pandas as pd

from health_paths import HEADER_ROW

log = logging.getLogger(__name__)


class ExportError(ValueError):
    """Raised when a Samsung Health export cannot be read."""


def is_url(source):
    return str(source).lower().startswith(("http://", "https://"))


def read_export(source):
    """Read one Samsung Health CSV export (local path or URL).

    The first line of an export is a banner ("com.samsung...,<id>,<ver>"), the
    second one is the header. Data rows end with a trailing comma, which pandas
    turns into an unnamed column; it is dropped here.
    """
    if not is_url(source) and not Path(source).exists():
        raise ExportError(f"Export file not found: {source}")

    log.info("Reading export %s", source)
    try:
        df = pd.read_csv(source, header=HEADER_ROW, index_col=False)
    except (URLError, OSError) as e:
        raise ExportError(f"Failed to fetch {source}: {e}") from e
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ExportError(f"Failed to parse {source}: {e}") from e

    df = df.loc[:, ~df.columns.astype(str).str.startswith("Unnamed")]
    log.info("Loaded %d rows x %d columns from %s", len(df), df.shape[1], source)
    return df


def load_exports(sources):
    return {name: read_export(src) for name, src in sources.items()}


def write_processed(frames, out_dir):
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = {}
    for name, df in frames.items():
        path = out_dir / f"{name}_clean.csv"
        df.to_csv(path, index=False)
        log.info("Wrote %s rows: %d", path, len(df))
        written[name] = path
    return written
