"""
Service dependencies for SiteCraft routes
"""
from config.settings import PREVIEW_VARIANT
from services.export_service import ExportService
from services.generation_service import GenerationRequestHandler
from services.preview_service import PreviewRenderer
from services.shell_service import ApplicationShell
from services.speech_service import RelayedSpeechRecognizer
from services.website_generator import GeminiWebsiteGenerator, WebsiteCodeGenerator

# Global instances - created on first use
website_generator = None
application_shell = None


def get_website_generator() -> WebsiteCodeGenerator:
    """Get or create the generation collaborator"""
    global website_generator
    if website_generator is None:
        website_generator = GeminiWebsiteGenerator()
    return website_generator


def get_generation_handler() -> GenerationRequestHandler:
    return GenerationRequestHandler(get_website_generator())


def get_export_service() -> ExportService:
    return ExportService()


def get_application_shell() -> ApplicationShell:
    """Get or create the single shell instance"""
    global application_shell
    if application_shell is None:
        application_shell = ApplicationShell(
            handler=get_generation_handler(),
            renderer=PreviewRenderer(PREVIEW_VARIANT),
            exporter=get_export_service(),
            speech=RelayedSpeechRecognizer(),
        )
    return application_shell
