"""
Flask application serving the Infinite Runway feeds, essay API and cron routes.
"""
import asyncio
import hmac
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from flask import Flask, Response, jsonify, request, send_from_directory
from werkzeug.exceptions import HTTPException

from ..config import Settings
from ..errors import ConfigurationError, DuplicateSlugError
from ..generation.client import GenerationClient
from ..models.newsletter import NewsletterType
from ..orchestration.newsletter_graph import NewsletterGraph
from ..publishing.catalog import PublicationCatalog
from ..publishing.essays import essay_provider
from ..publishing.feeds import build_rss, build_sitemap_json, build_sitemap_xml
from ..publishing.store import NewsletterStore
from ..utils.logging import AuditLogger

logger = logging.getLogger(__name__)

XML_HEADERS = {
    'X-Content-Type-Options': 'nosniff',
    'Cache-Control': 'public, max-age=3600',
}


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _parse_external_bool(value: Any, default: bool = False) -> bool:
    """Parse truthy query parameters safely."""
    if value is None:
        return default
    return str(value).strip().lower() in {'1', 'true', 'yes', 'on'}


def _error(message: str, status: int):
    return jsonify({'success': False, 'error': message, 'timestamp': _timestamp()}), status


def create_app(
    settings: Settings,
    catalog: Optional[PublicationCatalog] = None,
    pipeline_factory: Optional[Callable[[], NewsletterGraph]] = None,
    client_factory: Optional[Callable[[], GenerationClient]] = None,
) -> Flask:
    """
    Build the web application.

    Args:
        settings: Process settings
        catalog: Publication catalog (generated newsletters + essays when omitted)
        pipeline_factory: Builds the newsletter pipeline for the generation route
        client_factory: Builds the generation client for the health check
    """
    app = Flask(__name__)
    store = NewsletterStore(settings.newsletters_dir)
    catalog = catalog or PublicationCatalog([store, essay_provider()])
    client_factory = client_factory or (lambda: GenerationClient(settings))
    pipeline_factory = pipeline_factory or (lambda: NewsletterGraph(
        settings,
        client_factory(),
        store,
        audit=AuditLogger("web", settings.log_dir),
    ))

    def authorized() -> bool:
        if not settings.cron_secret:
            return True
        supplied = request.headers.get('Authorization', '')
        return hmac.compare_digest(supplied, f"Bearer {settings.cron_secret}")

    # ----------------------------
    # Feeds
    # ----------------------------
    @app.route('/rss.xml')
    def rss_feed():
        return Response(
            build_rss(catalog.all(), settings),
            content_type='application/xml; charset=utf-8',
            headers=XML_HEADERS,
        )

    @app.route('/sitemap.xml')
    def sitemap_xml():
        return Response(build_sitemap_xml(catalog.all(), settings), content_type='application/xml')

    @app.route('/api/sitemap/json')
    def sitemap_json():
        return jsonify(build_sitemap_json(settings))

    @app.route(f"{settings.images_url_path.rstrip('/')}/<path:filename>")
    def cover_image(filename: str):
        return send_from_directory(settings.images_dir.resolve(), filename)

    # ----------------------------
    # Essays
    # ----------------------------
    @app.route('/api/essays')
    def list_essays():
        page = request.args.get('page', 1, type=int)
        per_page = request.args.get('per_page', settings.posts_per_page, type=int)
        try:
            posts, total_pages = catalog.paginate(page, per_page)
        except ValueError as e:
            return _error(str(e), 400)
        return jsonify({
            'posts': [post.model_dump(mode='json') for post in posts],
            'page': page,
            'totalPages': total_pages,
        })

    @app.route('/api/essays/search')
    def search_essays():
        query = request.args.get('q', '')
        results = catalog.search(query)
        return jsonify({
            'query': query,
            'posts': [post.model_dump(mode='json') for post in results],
            'count': len(results),
        })

    @app.route('/api/essays/<slug>')
    def get_essay(slug: str):
        post = catalog.get_by_slug(slug)
        if post is None:
            return _error('Essay not found', 404)
        return jsonify(post.model_dump(mode='json'))

    # ----------------------------
    # Cron
    # ----------------------------
    @app.route('/api/cron/generate-newsletter', methods=['GET', 'POST'])
    def generate_newsletter():
        if request.method == 'GET':
            return jsonify({'message': 'Newsletter generation endpoint', 'methods': ['POST']})
        if not authorized():
            return _error('Unauthorized', 401)

        raw_type = request.args.get('type', NewsletterType.WEEKLY_DIGEST.value)
        try:
            newsletter_type = NewsletterType(raw_type)
        except ValueError:
            return _error(f'Unknown newsletter type: {raw_type}', 400)
        test_mode = _parse_external_bool(request.args.get('test'))

        if not settings.generation_enabled:
            logger.info(f"Newsletter generation disabled; acknowledging {raw_type} (test={test_mode})")
            return jsonify({
                'success': True,
                'type': newsletter_type.value,
                'testMode': test_mode,
                'output': f'Newsletter generation acknowledged for {newsletter_type.value} (generation disabled)',
                'timestamp': _timestamp(),
            })

        try:
            record = asyncio.run(pipeline_factory().run(
                newsletter_type, sponsor_info=settings.sponsor, dry_run=test_mode,
            ))
        except DuplicateSlugError as e:
            return _error(str(e), 409)

        if record is not None and not test_mode:
            catalog.refresh()
        payload: Dict[str, Any] = {
            'success': record is not None,
            'type': newsletter_type.value,
            'testMode': test_mode,
            'slug': record.slug if record else None,
            'output': f'Generated {record.slug}' if record else 'No source content available',
            'timestamp': _timestamp(),
        }
        return jsonify(payload), (200 if record else 503)

    @app.route('/api/cron/health-check', methods=['GET', 'POST'])
    def health_check():
        if request.method == 'GET':
            return jsonify({'message': 'Health check endpoint', 'methods': ['POST']})
        if not authorized():
            return _error('Unauthorized', 401)

        services: Dict[str, Any] = {'catalog': {'status': 'up', 'publications': len(catalog.all())}}
        healthy = True
        if settings.generation_enabled:
            missing = settings.missing_generation_settings()
            if missing:
                services['azure'] = {'status': 'down', 'error': f"missing settings: {', '.join(missing)}"}
                healthy = False
            else:
                up = asyncio.run(client_factory().test_connection())
                services['azure'] = {'status': 'up' if up else 'down'}
                healthy = up
        else:
            services['azure'] = {'status': 'disabled'}

        return jsonify({
            'success': healthy,
            'status': 'healthy' if healthy else 'degraded',
            'services': services,
            'timestamp': _timestamp(),
        }), (200 if healthy else 503)

    # ----------------------------
    # Errors
    # ----------------------------
    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return _error(e.description or e.name, e.code or 500)

    @app.errorhandler(ConfigurationError)
    def handle_configuration_error(e: ConfigurationError):
        logger.error(f"Configuration error: {e}")
        return _error(str(e), 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        logger.exception(f"Unhandled error on {request.path}: {e}")
        return _error(str(e) or 'Unknown error', 500)

    return app
