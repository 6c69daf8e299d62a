from django.http import JsonResponse
from django.db import connections
from django.db.utils import OperationalError
from django.core.cache import caches
import time
import uuid
from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')


def _cache_check(alias='default'):
    """Round-trip a throwaway key through the cache backend."""
    key = f'health:{uuid.uuid4().hex}'
    try:
        cache = caches[alias]
        cache.set(key, 'ok', timeout=5)
        value = cache.get(key)
        cache.delete(key)
    except Exception as e:
        logger.warning('Cache health check failed', alias=alias, error=str(e))
        return {'status': 'fail', 'error': str(e)}
    # django-redis with IGNORE_EXCEPTIONS swallows outages and returns None
    if value != 'ok':
        logger.warning('Cache health check returned unexpected value', alias=alias)
        return {'status': 'fail', 'error': 'cache did not return the probe value'}
    logger.debug('Cache health check succeeded', alias=alias)
    return {'status': 'ok'}


def _db_check(alias='default'):
    started = time.time()
    try:
        conn = connections[alias]
        conn.cursor().execute('SELECT 1')
        latency = round((time.time() - started) * 1000, 2)
        logger.debug('Database health check succeeded', alias=alias, latency_ms=latency)
        return {'status': 'ok', 'latency_ms': latency}
    except OperationalError as e:
        logger.warning('Database health check encountered operational error', alias=alias, error=str(e))
        return {'status': 'fail', 'error': str(e)}
    except Exception as e:
        logger.error('Database health check failed unexpectedly', alias=alias, error=str(e), exception=e.__class__.__name__)
        return {'status': 'fail', 'error': str(e), 'exception': e.__class__.__name__}


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug('Liveness probe served')
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: verifies critical dependencies (database, cache)."""
    checks = {
        'database': _db_check(),
        'cache': _cache_check(),
    }

    failing = [name for name, r in checks.items() if r.get('status') == 'fail']
    overall_status = 'ok' if not failing else 'degraded'
    http_status = 200 if not failing else 503
    payload = {
        'status': overall_status,
        'checks': checks,
    }
    logger.info('Readiness probe evaluated', status=overall_status, failing_components=failing)
    return JsonResponse(payload, status=http_status)
