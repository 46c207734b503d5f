"""Report-viewed alert template — sent to administrators when a report is opened."""

from datetime import datetime
from html import escape

from notifier.event.event import REPORT_VIEWED, ReportViewedEvent, normalize_report_type

SUBJECT_DATE_FORMAT = "%d/%m/%Y %H:%M"
BODY_DATE_FORMAT = "%d/%m/%Y %H:%M:%S"

_HTML = """\
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <style>
        body {{ font-family: Arial, sans-serif; margin: 0; padding: 20px; background-color: #f5f5f5; }}
        .container {{ max-width: 500px; margin: 0 auto; background: white; border-radius: 8px;
                      padding: 30px; box-shadow: 0 2px 8px rgba(0,0,0,0.1); }}
        .title {{ color: #333; font-size: 20px; font-weight: bold; margin-bottom: 20px;
                  border-bottom: 2px solid #007bff; padding-bottom: 10px; }}
        .info {{ margin: 15px 0; line-height: 1.6; color: #555; }}
        .info strong {{ color: #333; }}
        .footer {{ margin-top: 30px; padding-top: 20px; border-top: 1px solid #eee;
                   text-align: center; font-size: 12px; color: #999; }}
    </style>
</head>
<body>
    <div class="container">
        <div class="title">🔍 Visualización de Reportes - Sistema de Quejas Boyacá</div>
        <div class="info">
            <p>Se ha registrado una visualización del sistema de quejas.</p>
            <p><strong>Tipo de reporte:</strong> {report_type}</p>
            <p><strong>Fecha y hora:</strong> {viewed_at}</p>
        </div>
        <div class="footer">
            Sistema de Alertas Automático - Boyacá
        </div>
    </div>
</body>
</html>
"""


class ReportViewedTemplate:
    event_type = REPORT_VIEWED

    @staticmethod
    def render(event: ReportViewedEvent, default_report_type: str, now: datetime | None = None) -> dict:
        # A missing timestamp renders as "now" in both subject and body.
        viewed_at = event.timestamp or now or datetime.now()
        report_type = normalize_report_type(event.report_type, default_report_type)
        body_date = viewed_at.strftime(BODY_DATE_FORMAT)

        return {
            "subject": (
                f"🔍 Reporte Visualizado - {event.total_complaints} quejas "
                f"({viewed_at.strftime(SUBJECT_DATE_FORMAT)})"
            ),
            "body": (
                "Se ha registrado una visualización del sistema de quejas.\n\n"
                f"Tipo de reporte: {report_type}\n"
                f"Fecha y hora: {body_date}\n\n"
                "Sistema de Alertas Automático - Boyacá\n"
            ),
            "html_body": _HTML.format(report_type=escape(report_type), viewed_at=body_date),
        }
