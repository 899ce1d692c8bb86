import logging

from application.services import ConversionService
from config.settings import get_settings
from infrastructure.cache.rate_cache import RateCache
from infrastructure.providers import build_provider

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	rate_cache: RateCache | None = None
	conversion_service: ConversionService | None = None


deps = AppDependencies()


async def init_dependencies() -> None:
	"""Build the provider and prime the rate cache. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	provider = build_provider(settings.RATE_PROVIDER, settings)
	try:
		deps.rate_cache = await RateCache.create(provider, max_age=settings.max_age)
	except Exception:
		await provider.close()
		raise
	deps.conversion_service = ConversionService(deps.rate_cache)
	logger.info(
		f'Dependencies initialized (provider={provider.name}, max_age={settings.max_age})'
	)


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.rate_cache:
		await deps.rate_cache.close()
	deps.rate_cache = None
	deps.conversion_service = None

	logger.info('Cleanup complete')


def get_rate_cache() -> RateCache:
	if deps.rate_cache is None:
		raise RuntimeError('Rate cache not initialized')
	return deps.rate_cache


def get_conversion_service() -> ConversionService:
	if deps.conversion_service is None:
		raise RuntimeError('Conversion service not initialized')
	return deps.conversion_service
