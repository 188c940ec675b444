import datetime
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from reports.exceptions import StatementError
from reports.resolvers import MetadataResolver, RequestMetadataResolver, latest_file
from reports.utils import (
    generate_pdf_from_request,
    load_statement_rows,
    render_statement_pdf,
    timestamped_name,
    write_statement_pdf,
)


class Command(BaseCommand):
    help = (
        "Render an account statement PDF. By default renders the most recent "
        "statement request; --request picks one by id; the directory options "
        "render the newest spreadsheet with the newest metadata record."
    )

    def add_arguments(self, parser):
        parser.add_argument('--request', type=int, dest='request_id', help='Statement request id')
        parser.add_argument('--spreadsheet-dir', help='Directory holding uploaded spreadsheets')
        parser.add_argument('--metadata-dir', help='Directory holding JSON metadata records')
        parser.add_argument('--output-dir', help='Directory the PDF is written to')
        parser.add_argument('--as-of', type=datetime.date.fromisoformat, help='Statement date (YYYY-MM-DD), defaults to today')

    def handle(self, *args, **options):
        as_of = options['as_of'] or timezone.localdate()
        dirs = [options['spreadsheet_dir'], options['metadata_dir'], options['output_dir']]

        if any(dirs):
            if not all(dirs):
                raise CommandError("--spreadsheet-dir, --metadata-dir and --output-dir must be given together")
            if options['request_id'] is not None:
                raise CommandError("--request cannot be combined with the directory options")
            try:
                path = self._render_from_directories(*dirs, as_of=as_of)
            except StatementError as exc:
                raise CommandError(str(exc)) from exc
            self.stdout.write(self.style.SUCCESS(f"Statement written to {path}"))
            return

        resolver = RequestMetadataResolver()
        try:
            stmt = resolver.resolve_request(options['request_id'])
            pdf_file = generate_pdf_from_request(stmt, as_of=as_of)
            stmt.pdf_file.save(pdf_file.name, pdf_file, save=True)
        except (StatementError, OSError) as exc:
            raise CommandError(str(exc)) from exc
        self.stdout.write(self.style.SUCCESS(f"Statement request {stmt.pk} rendered to {stmt.pdf_file.name}"))

    def _render_from_directories(self, spreadsheet_dir, metadata_dir, output_dir, as_of):
        spreadsheet = latest_file(spreadsheet_dir)
        self.stdout.write(f"Using spreadsheet {spreadsheet}")
        metadata = MetadataResolver(metadata_dir).resolve()
        rows = load_statement_rows(str(spreadsheet))
        pdf_bytes = render_statement_pdf(rows, metadata, as_of)
        return write_statement_pdf(Path(output_dir) / timestamped_name(".pdf"), pdf_bytes)
