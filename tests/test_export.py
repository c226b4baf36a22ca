"""Unit tests for CSV export."""

import csv
import io
from datetime import datetime, timezone

from lead_downloader.domain.models import LEAD_FIELDS, Lead
from lead_downloader.export import build_download_filename, leads_to_csv

HEADER = (
    "first_name,last_name,title,company_name,city,state,country,"
    "email,phone,linkedin_url,company_website"
)


class TestLeadsToCsv:
    """Tests for leads_to_csv."""

    def test_header_only_for_empty_result(self):
        assert leads_to_csv([]) == HEADER + "\n"

    def test_plain_values_are_not_quoted(self):
        output = leads_to_csv([Lead(first_name="Ada", last_name="Lovelace")])

        assert output.splitlines()[1] == "Ada,Lovelace,,,,,,,,,"

    def test_comma_field_is_quoted(self):
        output = leads_to_csv([Lead(company_name="Acme, Inc.")])

        assert '"Acme, Inc."' in output

    def test_quotes_are_doubled(self):
        output = leads_to_csv([Lead(title='The "Best" Designer')])

        assert '"The ""Best"" Designer"' in output

    def test_newline_field_is_quoted(self):
        output = leads_to_csv([Lead(title="Line one\nLine two")])

        assert '"Line one\nLine two"' in output

    def test_parses_back_with_standard_reader(self):
        """Serializing then parsing reproduces every field of every lead."""
        leads = [
            Lead(first_name="Ada", company_name="Acme, Inc.", email="ada@acme.example"),
            Lead(first_name='Grace "Amazing"', title="Rear\nAdmiral", phone="+1 555 0100"),
        ]

        rows = list(csv.reader(io.StringIO(leads_to_csv(leads))))

        assert rows[0] == list(LEAD_FIELDS)
        assert rows[1:] == [lead.as_row() for lead in leads]


class TestBuildDownloadFilename:
    """Tests for the download filename."""

    def test_embeds_epoch_milliseconds(self):
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)

        assert build_download_filename(now) == "apollo_leads_1735689600000.csv"

    def test_defaults_to_current_time(self):
        filename = build_download_filename()

        assert filename.startswith("apollo_leads_")
        assert filename.endswith(".csv")
        assert filename[len("apollo_leads_"):-len(".csv")].isdigit()
