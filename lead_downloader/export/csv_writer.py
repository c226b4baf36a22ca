"""CSV serialization for lead result sets."""

import csv
import io
from datetime import datetime
from typing import Iterable, Optional

from lead_downloader.domain.models import LEAD_FIELDS, Lead
from lead_downloader.utils.timestamps import timestamp_to_unix_millis, utc_now

DOWNLOAD_FILENAME_PREFIX = "apollo_leads"


def leads_to_csv(leads: Iterable[Lead]) -> str:
    """Serialize leads to a CSV document.

    The first row is the fixed LEAD_FIELDS header. Fields containing a
    comma, quote or newline are wrapped in double quotes with internal
    quotes doubled.

    Args:
        leads: Leads to serialize, in output order

    Returns:
        CSV text with '\\n' line endings
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(LEAD_FIELDS)
    for lead in leads:
        writer.writerow(lead.as_row())
    return buffer.getvalue()


def build_download_filename(now: Optional[datetime] = None) -> str:
    """Build a download filename embedding the generation time.

    Example:
        >>> from datetime import datetime, timezone
        >>> build_download_filename(datetime(2025, 1, 1, tzinfo=timezone.utc))
        'apollo_leads_1735689600000.csv'
    """
    generated_at = now or utc_now()
    return f"{DOWNLOAD_FILENAME_PREFIX}_{timestamp_to_unix_millis(generated_at)}.csv"
