"""Template registry — maps broker event types to template classes."""

from notifier.event.event import REPORT_VIEWED
from notifier.templates.report_viewed import ReportViewedTemplate

TEMPLATE_REGISTRY: dict[str, type] = {
    REPORT_VIEWED: ReportViewedTemplate,
}


def get_template(event_type: str):
    """Look up a template class by event type string."""
    template_cls = TEMPLATE_REGISTRY.get(event_type)
    if template_cls is None:
        raise ValueError(f"No template registered for event type: {event_type}")
    return template_cls
