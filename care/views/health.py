from django.http import HttpResponse, JsonResponse
from django.utils import timezone

from care.services.database import Database


def healthz(request):
    """Liveness: the process is serving; no dependency is checked."""
    return HttpResponse('ok', content_type='text/plain')


def readyz(request):
    if Database().ping():
        return HttpResponse('ready', content_type='text/plain')
    return HttpResponse('not-ready', content_type='text/plain', status=503)


def health(request):
    """Older JSON liveness probe, kept for existing monitors."""
    return JsonResponse({'status': 'OK', 'timestamp': timezone.now().isoformat()})
