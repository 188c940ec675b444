import logging

from django.http import FileResponse, Http404, HttpResponseNotFound, HttpResponseServerError
from django.shortcuts import get_object_or_404, render
from django.views.decorators.http import require_GET, require_POST

from .exceptions import StatementError
from .forms import StatementRequestForm
from .models import StatementRequest
from .utils import generate_pdf_from_request

logger = logging.getLogger(__name__)


@require_GET
def home(request):
    return render(request, 'reports/home.html', {'form': StatementRequestForm()})


@require_POST
def create_document(request):
    """
    Store the uploaded spreadsheet and identity fields as one StatementRequest,
    render its PDF and show the confirmation page.

    A failed render removes the request and its files so nothing half-made is kept.
    """
    if 'spreadsheet' not in request.FILES:
        logger.warning("Statement requested without a spreadsheet upload")
        return HttpResponseNotFound("Spreadsheet not found.")

    form = StatementRequestForm(request.POST, request.FILES)
    if not form.is_valid():
        return render(request, 'reports/home.html', {'form': form}, status=400)

    stmt = form.save()
    logger.info("Rendering statement request %s from %s", stmt.pk, stmt.spreadsheet.name)

    try:
        pdf_file = generate_pdf_from_request(stmt)
        stmt.pdf_file.save(pdf_file.name, pdf_file, save=True)
    except (StatementError, OSError):
        logger.exception("Statement request %s could not be rendered", stmt.pk)
        return _discard(stmt)
    except Exception:
        logger.exception("Unexpected error while rendering statement request %s", stmt.pk)
        return _discard(stmt)

    return render(request, 'reports/document.html', {'statement': stmt})


def _discard(stmt):
    stmt.delete_files()
    stmt.delete()
    return HttpResponseServerError("The statement could not be generated.")


@require_GET
def download_document(request, pk):
    stmt = get_object_or_404(StatementRequest, pk=pk)
    if not stmt.pdf_file:
        raise Http404("Statement has not been rendered")
    try:
        handle = stmt.pdf_file.open('rb')
    except FileNotFoundError:
        logger.error("Rendered statement for request %s is missing from storage", stmt.pk)
        raise Http404("Statement file is missing")
    return FileResponse(handle, as_attachment=True, filename=f"statement_{stmt.pk}.pdf")
