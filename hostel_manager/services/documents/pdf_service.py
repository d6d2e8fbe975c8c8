"""
PDF documents rendered with reportlab: payment statement, welcome letter,
vacate certificate and payment invoice.

Each renderer is a pure function of the entity snapshot it is given plus
optional logo bytes. Rendering failures raise ``GenerationError``; there is
no fallback document.
"""

import io
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.lib.utils import ImageReader
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from hostel_manager.config.settings import settings
from hostel_manager.core.exceptions import GenerationError
from hostel_manager.core.logging import get_logger
from hostel_manager.models.base import PaymentStatus
from hostel_manager.utils.formatters import CurrencyFormatter, DateTimeFormatter

logger = get_logger(__name__)

COLORS = {
    'primary': HexColor('#7c3aed'),
    'primary_light': HexColor('#a78bfa'),
    'success': HexColor('#10b981'),
    'warning': HexColor('#f59e0b'),
    'danger': HexColor('#ef4444'),
    'dark': HexColor('#1f2937'),
    'text': HexColor('#374151'),
    'text_light': HexColor('#6b7280'),
    'border': HexColor('#e5e7eb'),
    'background': HexColor('#f9fafb'),
}

STATUS_COLORS = {
    PaymentStatus.PAID: COLORS['success'],
    PaymentStatus.DUE: COLORS['warning'],
    PaymentStatus.OVERDUE: COLORS['danger'],
}

CONTENT_WIDTH = A4[0] - 4 * cm

FOOTER_TAGLINE = "A safe, comfortable, and empowering space for women."


def _money(amount) -> str:
    # Base-14 fonts have no rupee glyph
    return f"Rs. {CurrencyFormatter.format_indian_currency(amount)}"


class PdfService:
    """Renders hostel documents to PDF bytes."""

    def __init__(self, hostel_name: Optional[str] = None, today: Optional[date] = None):
        self.hostel_name = hostel_name or settings.HOSTEL_NAME
        self.today = today or date.today()
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom paragraph styles"""
        self.styles.add(ParagraphStyle(
            name='DocTitle',
            parent=self.styles['Heading1'],
            fontSize=20,
            textColor=COLORS['dark'],
            spaceAfter=12,
        ))
        self.styles.add(ParagraphStyle(
            name='SectionHeading',
            parent=self.styles['Heading2'],
            fontSize=13,
            textColor=COLORS['primary'],
            spaceBefore=14,
            spaceAfter=8,
        ))
        self.styles.add(ParagraphStyle(
            name="LetterBody",
            parent=self.styles['Normal'],
            fontSize=11,
            leading=16,
            textColor=COLORS['text'],
            spaceAfter=10,
        ))
        self.styles.add(ParagraphStyle(
            name='DateLine',
            parent=self.styles['Normal'],
            fontSize=9,
            textColor=COLORS['text_light'],
            alignment=TA_RIGHT,
        ))
        self.styles.add(ParagraphStyle(
            name='Badge',
            parent=self.styles['Normal'],
            fontName='Helvetica-Bold',
            fontSize=10,
            textColor=colors.white,
            alignment=TA_CENTER,
        ))

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    def payment_statement(
        self,
        resident,
        payments: Iterable,
        room_name: Optional[str] = None,
        cot_name: Optional[str] = None,
        logo: Optional[bytes] = None,
    ) -> bytes:
        payments = list(payments)
        story = [
            Paragraph("Payment Statement", self.styles['DocTitle']),
            self._date_line(),
            self._info_table([
                ("Resident Name", resident.name),
                ("Contact", resident.phone or "N/A"),
                ("Room Assignment", self._assignment(room_name, cot_name, " - ")),
                ("Monthly Rent", _money(resident.rent)),
            ]),
            Paragraph("Payment History", self.styles['SectionHeading']),
        ]

        rows = [["Date", "Description", "Amount", "Status"]]
        for payment in payments:
            rows.append([
                DateTimeFormatter.format_date(payment.due_date),
                Paragraph(escape(payment.description or ""), self.styles['Normal']),
                _money(payment.amount),
                payment.status.value,
            ])
        table = Table(rows, colWidths=[3 * cm, CONTENT_WIDTH - 9 * cm, 3.5 * cm, 2.5 * cm], repeatRows=1)
        style = self._grid_style()
        style.add('ALIGN', (2, 0), (2, -1), 'RIGHT')
        style.add('ALIGN', (3, 0), (3, -1), 'CENTER')
        for row, payment in enumerate(payments, start=1):
            style.add('TEXTCOLOR', (3, row), (3, row), STATUS_COLORS.get(payment.status, COLORS['text']))
        table.setStyle(style)
        story.append(table)

        total_paid = sum((Decimal(str(p.amount)) for p in payments if p.status == PaymentStatus.PAID), Decimal("0"))
        total_due = sum((Decimal(str(p.amount)) for p in payments if p.status != PaymentStatus.PAID), Decimal("0"))
        story += [
            Paragraph("Payment Summary", self.styles['SectionHeading']),
            self._info_table([("Total Paid", _money(total_paid)), ("Total Outstanding", _money(total_due))]),
        ]
        return self._build(f"Payment Statement - {resident.name}", story, logo)

    def welcome_letter(
        self,
        resident,
        room_name: Optional[str] = None,
        cot_name: Optional[str] = None,
        logo: Optional[bytes] = None,
    ) -> bytes:
        body = self.styles["LetterBody"]
        story = [
            self._date_line('long_date'),
            self._badge("WELCOME", COLORS['primary']),
            Spacer(1, 12),
            Paragraph(f"Dear {escape(resident.name)},", self.styles['Heading3']),
            Paragraph(
                "Welcome to your new home! We are absolutely delighted to have you join our vibrant and "
                f"supportive community at {escape(self.hostel_name)}. Our mission is to provide a safe, comfortable, "
                "and empowering environment where every resident can thrive.",
                body,
            ),
            Paragraph("Financial Summary", self.styles['SectionHeading']),
            self._info_table([
                ("Room Assignment", self._assignment(room_name, cot_name, ", ")),
                ("Monthly Rent", _money(resident.rent)),
                ("Security Deposit (Refundable)", _money(resident.deposit_amount)),
            ]),
            Spacer(1, 12),
            Paragraph(
                "We have established a comprehensive set of guidelines to ensure everyone's comfort, safety, "
                "and well-being. You will find these in your resident handbook. Our team is always available "
                "should you have any questions or require assistance with anything during your stay.",
                body,
            ),
            Paragraph(
                "We genuinely look forward to having you as part of our family and hope your stay with us is "
                "pleasant, comfortable, and memorable.",
                body,
            ),
        ]
        story += self._signature("Warm regards,", "The Management Team")
        return self._build(f"Welcome Letter - {resident.name}", story, logo)

    def vacate_letter(self, resident, logo: Optional[bytes] = None) -> bytes:
        today = DateTimeFormatter.format_date(self.today, 'long_date')
        body = self.styles["LetterBody"]
        story = [
            Paragraph("Certificate of Hostel Vacation", self.styles['DocTitle']),
            self._date_line('long_date'),
            Paragraph("Resident Information", self.styles['SectionHeading']),
            self._info_table([("Name", resident.name), ("Resident ID", resident.id)]),
            Spacer(1, 12),
            Paragraph("To Whom It May Concern,", body),
            Paragraph(
                f"This letter serves as official certification that {escape(resident.name)} (Resident ID: "
                f"{resident.id}) has successfully completed all necessary formalities and has officially "
                f"vacated their accommodation at {escape(self.hostel_name)} as of {today}.",
                body,
            ),
            self._badge_row(["ALL DUES SETTLED", "NO PENDING ISSUES"], COLORS['success']),
            Spacer(1, 12),
            Paragraph(
                "We sincerely thank them for being part of our community and wish them every success and "
                "happiness in their future endeavors.",
                body,
            ),
        ]
        story += self._signature("Sincerely,", "Hostel Management")
        return self._build(f"Vacate Certificate - {resident.name}", story, logo)

    def invoice(self, payment, resident, logo: Optional[bytes] = None) -> bytes:
        contact = [resident.name]
        if resident.phone:
            contact.append(f"Phone: {resident.phone}")
        if resident.email:
            contact.append(f"Email: {resident.email}")

        header = Table(
            [[
                Paragraph("<b>BILLED TO</b><br/>" + "<br/>".join(escape(line) for line in contact), self.styles['Normal']),
                Paragraph(
                    f"<b>INVOICE NUMBER</b><br/>#INV-{payment.id}<br/><b>INVOICE DATE</b><br/>"
                    f"{DateTimeFormatter.format_date(self.today)}",
                    ParagraphStyle('InvoiceMeta', parent=self.styles['Normal'], alignment=TA_RIGHT),
                ),
            ]],
            colWidths=[CONTENT_WIDTH - 8 * cm, 8 * cm],
        )
        header.setStyle(TableStyle([('VALIGN', (0, 0), (-1, -1), 'TOP')]))

        items = Table(
            [["DESCRIPTION", "AMOUNT"], [Paragraph(escape(payment.description or "-"), self.styles['Normal']), _money(payment.amount)]],
            colWidths=[CONTENT_WIDTH - 4.5 * cm, 4.5 * cm],
        )
        style = self._grid_style()
        style.add('ALIGN', (1, 0), (1, -1), 'RIGHT')
        items.setStyle(style)

        story = [
            Paragraph("INVOICE", self.styles['DocTitle']),
            header,
            Paragraph("Invoice Details", self.styles['SectionHeading']),
            items,
            Spacer(1, 12),
            self._info_table([("Total Amount", _money(payment.amount))]),
            Spacer(1, 12),
        ]
        if payment.status == PaymentStatus.PAID:
            story.append(self._badge("PAYMENT RECEIVED", COLORS['success']))
        elif payment.status == PaymentStatus.OVERDUE:
            story.append(self._badge("PAYMENT OVERDUE", COLORS['danger']))
        else:
            story.append(self._badge("PAYMENT DUE", COLORS['warning']))
        return self._build(f"Invoice INV-{payment.id}", story, logo)

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------

    def _build(self, title: str, story: List, logo: Optional[bytes]) -> bytes:
        buffer = io.BytesIO()
        try:
            logo_reader = ImageReader(io.BytesIO(logo)) if logo else None
            doc = SimpleDocTemplate(
                buffer,
                pagesize=A4,
                title=title,
                author=self.hostel_name,
                topMargin=3.5 * cm,
                bottomMargin=2.5 * cm,
                leftMargin=2 * cm,
                rightMargin=2 * cm,
            )

            def decorate(canvas, document):
                self._draw_letterhead(canvas, document, logo_reader)

            doc.build(story, onFirstPage=decorate, onLaterPages=decorate)
        except Exception as e:
            logger.error(f"PDF generation failed for '{title}': {e}", exc_info=True)
            raise GenerationError("Failed to generate document", {"document": title}) from e
        return buffer.getvalue()

    def _draw_letterhead(self, canvas, document, logo_reader: Optional[ImageReader]) -> None:
        width, height = A4
        canvas.saveState()

        canvas.setFillColor(COLORS['primary'])
        canvas.rect(0, 0, 6, height, stroke=0, fill=1)
        canvas.setFillColor(COLORS['primary_light'])
        canvas.rect(6, height - 8, width - 6, 8, stroke=0, fill=1)

        text_x = 2 * cm
        if logo_reader is not None:
            canvas.drawImage(logo_reader, 2 * cm, height - 2.8 * cm, 1.6 * cm, 1.6 * cm,
                             preserveAspectRatio=True, mask='auto')
            text_x = 4 * cm
        canvas.setFillColor(COLORS['dark'])
        canvas.setFont('Helvetica-Bold', 16)
        canvas.drawString(text_x, height - 2 * cm, self.hostel_name)
        canvas.setStrokeColor(COLORS['border'])
        canvas.setLineWidth(1)
        canvas.line(2 * cm, height - 3 * cm, width - 2 * cm, height - 3 * cm)

        canvas.setFillColor(COLORS['primary_light'])
        canvas.rect(2 * cm, 2 * cm, width - 4 * cm, 2, stroke=0, fill=1)
        canvas.setFillColor(COLORS['text_light'])
        canvas.setFont('Helvetica', 7)
        canvas.drawString(2 * cm, 1.4 * cm, FOOTER_TAGLINE)
        canvas.setFont('Helvetica-Bold', 7)
        canvas.drawRightString(width - 2 * cm, 1.4 * cm, f"Page {document.page}")

        canvas.restoreState()

    def _date_line(self, format_type: str = 'short_date') -> Paragraph:
        return Paragraph(DateTimeFormatter.format_date(self.today, format_type), self.styles['DateLine'])

    @staticmethod
    def _assignment(room_name: Optional[str], cot_name: Optional[str], separator: str) -> str:
        if room_name and cot_name:
            return f"{room_name}{separator}{cot_name}"
        return "Not Assigned"

    def _info_table(self, pairs: Sequence) -> Table:
        label_style = ParagraphStyle('InfoLabel', parent=self.styles['Normal'], fontSize=8,
                                     textColor=COLORS['text_light'])
        rows = [[Paragraph(label.upper(), label_style), Paragraph(f"<b>{escape(str(value))}</b>", self.styles['Normal'])]
                for label, value in pairs]
        table = Table(rows, colWidths=[5.5 * cm, CONTENT_WIDTH - 5.5 * cm])
        table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), COLORS['background']),
            ('LINEBELOW', (0, 0), (-1, -1), 0.25, COLORS['border']),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('TOPPADDING', (0, 0), (-1, -1), 6),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ]))
        return table

    @staticmethod
    def _grid_style() -> TableStyle:
        return TableStyle([
            ('BACKGROUND', (0, 0), (-1, 0), COLORS['background']),
            ('TEXTCOLOR', (0, 0), (-1, 0), COLORS['text_light']),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('LINEBELOW', (0, 0), (-1, -1), 0.25, COLORS['border']),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('TOPPADDING', (0, 0), (-1, -1), 5),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
        ])

    def _badge(self, text: str, color) -> Table:
        badge = Table([[Paragraph(text, self.styles['Badge'])]], colWidths=[6 * cm], hAlign='LEFT')
        badge.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), color),
            ('TOPPADDING', (0, 0), (-1, -1), 5),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
        ]))
        return badge

    def _badge_row(self, labels: Sequence[str], color) -> Table:
        row = Table([[Paragraph(label, self.styles['Badge']) for label in labels]], hAlign='LEFT',
                    colWidths=[6 * cm] * len(labels))
        row.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (-1, -1), color),
            ('LINEAFTER', (0, 0), (-2, -1), 4, colors.white),
            ('TOPPADDING', (0, 0), (-1, -1), 5),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
        ]))
        return row

    def _signature(self, closing: str, signatory: str) -> List:
        return [
            Spacer(1, 16),
            Paragraph(closing, self.styles["LetterBody"]),
            Paragraph(f"<b>{signatory}</b>", self.styles['Normal']),
            Paragraph(self.hostel_name, self.styles['DateLine'].clone('SignatureHostel', alignment=0)),
        ]
