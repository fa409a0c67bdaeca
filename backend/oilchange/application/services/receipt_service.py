"""Application service — renders the customer receipt for a service record.

Produces an HTML document (converted to PDF on the client) and a short
plain-text message suitable for messaging apps.
"""

import html
import logging
from datetime import date

from oilchange.application.interfaces import ServiceRecordRepository, ShopRepository
from oilchange.domain.entities import Receipt, ServiceRecord, Shop
from oilchange.domain.exceptions import EntityNotFoundError

logger = logging.getLogger(__name__)

_DATE_FORMAT = "%d/%m/%Y"

_SERVICE_LABELS: dict[str, str] = {
    "oil_filter": "Filtro de aceite",
    "air_filter": "Filtro de aire",
    "fuel_filter": "Filtro de combustible",
    "cabin_filter": "Filtro de habitáculo",
    "additive": "Aditivo",
    "lubrication": "Engrase",
    "coolant": "Refrigerante",
    "gearbox": "Caja",
    "differential": "Diferencial",
}

_STYLES = """
    body { font-family: 'Helvetica', Arial, sans-serif; color: #333; line-height: 1.4; margin: 0; }
    .container { max-width: 800px; margin: 0 auto; padding: 20px; }
    .header { text-align: center; margin-bottom: 30px; border-bottom: 2px solid #2E7D32; padding-bottom: 20px; }
    .logo { max-width: 150px; margin-bottom: 10px; }
    .title { font-size: 24px; font-weight: bold; color: #2E7D32; }
    .ticket { font-size: 20px; font-weight: bold; color: #2E7D32; margin: 10px 0; }
    .section { margin-bottom: 25px; padding-bottom: 15px; border-bottom: 1px solid #eee; }
    .section-title { font-size: 18px; font-weight: bold; color: #2E7D32; margin-bottom: 15px; }
    .row { display: flex; margin-bottom: 8px; }
    .label { width: 180px; font-weight: bold; }
    .services { display: grid; grid-template-columns: 1fr 1fr; grid-gap: 10px; }
    .service { padding: 10px; border: 1px solid #ddd; border-radius: 4px; }
    .done { color: #4CAF50; }
    .not-done { color: #B71C1C; }
    .note { font-size: 13px; color: #666; font-style: italic; }
    .alert { background-color: #FFF9C4; border-left: 4px solid #FFC107; padding: 10px 15px; }
    .danger { background-color: #FFEBEE; border-left: 4px solid #B71C1C; padding: 10px 15px; }
    .footer { margin-top: 30px; text-align: center; font-size: 12px; color: #666; }
"""


def _fmt_date(value: date | None) -> str:
    return value.strftime(_DATE_FORMAT) if value else "-"


def _esc(value: object) -> str:
    return html.escape("" if value is None else str(value))


class ReceiptService:
    """Builds receipts from a record plus its shop's contact details."""

    def __init__(
        self,
        record_repository: ServiceRecordRepository,
        shop_repository: ShopRepository,
        due_soon_days: int = 7,
    ):
        self._records = record_repository
        self._shops = shop_repository
        self._due_soon_days = due_soon_days

    async def render(self, record_id: str, today: date | None = None) -> Receipt:
        record = await self._records.get_by_id(record_id)
        if record is None:
            raise EntityNotFoundError("ServiceRecord", record_id)
        shop = await self._shops.get_by_id(record.shop_id)
        if shop is None:
            raise EntityNotFoundError("Shop", record.shop_id)

        today = today or date.today()
        logger.debug("Rendering receipt %s for shop %s", record.ticket_number, shop.id)
        return Receipt(
            ticket_number=record.ticket_number,
            html=self.build_html(record, shop, today),
            share_text=self.build_share_text(record, shop),
            file_name=f"Cambio_{record.ticket_number.replace('-', '_', 1)}",
        )

    # ── Plain text ───────────────────────────────────────────────────

    @staticmethod
    def build_share_text(record: ServiceRecord, shop: Shop) -> str:
        next_km = f"{record.next_km} km" if record.next_km is not None else "-"
        return (
            f"🔧 *CAMBIO DE ACEITE {record.ticket_number}* 🔧\n\n"
            f"👤 *Cliente:* {record.client_name}\n"
            f"🚗 *Vehículo:* {record.make} {record.model} ({record.plate})\n"
            f"🛢️ *Aceite:* {record.oil_type} {record.oil_brand} {record.oil_grade}\n"
            f"📅 *Fecha:* {_fmt_date(record.service_date)}\n"
            f"🔄 *Próximo cambio:* {_fmt_date(record.next_service_date)} o {next_km}\n\n"
            f"Gracias por confiar en {shop.name or record.shop_name}! 👍"
        )

    # ── HTML ─────────────────────────────────────────────────────────

    def due_alert(self, record: ServiceRecord, today: date) -> str:
        """Overdue / due-soon banner, empty when the next change is far off."""
        if record.next_service_date is None:
            return ""
        days = (record.next_service_date - today).days
        if days < 0:
            return (
                '<div class="danger"><strong>¡ALERTA!</strong> '
                f"Cambio vencido hace {abs(days)} días.</div>"
            )
        if 0 < days <= self._due_soon_days:
            return (
                '<div class="alert"><strong>¡ATENCIÓN!</strong> '
                f"Próximo cambio en {days} días.</div>"
            )
        return ""

    def build_html(self, record: ServiceRecord, shop: Shop, today: date) -> str:
        def row(label: str, value: object) -> str:
            return (
                f'<div class="row"><div class="label">{_esc(label)}:</div>'
                f"<div>{_esc(value)}</div></div>"
            )

        services = []
        for name, item in record.services.items():
            state = "Realizado" if item.done else "No realizado"
            css = "done" if item.done else "not-done"
            services.append(
                f'<div class="service"><div>{_esc(_SERVICE_LABELS.get(name, name))}: '
                f'<span class="{css}">{state}</span></div>'
                f'<div class="note">{_esc(item.note or "Sin notas")}</div></div>'
            )

        logo = f'<img class="logo" src="{_esc(shop.logo_url)}"/>' if shop.logo_url else ""
        contact = " · ".join(
            _esc(part) for part in (shop.address, shop.phone, shop.email) if part
        )
        tax_id = f"<div>CUIT: {_esc(shop.tax_id)}</div>" if shop.tax_id else ""
        notes = (
            f'<div class="section"><strong>Observaciones:</strong><br>{_esc(record.notes)}</div>'
            if record.notes
            else ""
        )
        next_km = f"{record.next_km} km" if record.next_km is not None else "-"

        return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<title>Cambio de Aceite {_esc(record.ticket_number)}</title>
<style>{_STYLES}</style>
</head>
<body>
<div class="container">
  <div class="header">
    {logo}
    <div class="title">{_esc(shop.name or record.shop_name)}</div>
    <div>{contact}</div>
    {tax_id}
    <div>Comprobante de Cambio de Aceite</div>
    <div class="ticket">{_esc(record.ticket_number)}</div>
  </div>
  <div class="section">
    <div class="section-title">Información del Cliente</div>
    {row("Cliente", record.client_name)}
    {row("Teléfono", record.client_phone)}
  </div>
  <div class="section">
    <div class="section-title">Información del Vehículo</div>
    {row("Vehículo", f"{record.make} {record.model} ({record.year})")}
    {row("Dominio", record.plate)}
    {row("Tipo", record.vehicle_type)}
    {row("Kilometraje actual", f"{record.current_km} km")}
  </div>
  <div class="section">
    <div class="section-title">Aceite y Servicio</div>
    {row("Tipo de aceite", record.oil_type)}
    {row("Marca", record.oil_brand)}
    {row("Viscosidad (SAE)", record.oil_grade)}
    {row("Cantidad", record.oil_quantity)}
    {row("Fecha del servicio", _fmt_date(record.service_date))}
    {row("Próximo cambio", f"{_fmt_date(record.next_service_date)} o {next_km}")}
  </div>
  {self.due_alert(record, today)}
  <div class="section">
    <div class="section-title">Servicios Realizados</div>
    <div class="services">{"".join(services)}</div>
  </div>
  {notes}
  <div class="footer">Operario: {_esc(record.operator_name)} · {_esc(shop.name)}</div>
</div>
</body>
</html>
"""
