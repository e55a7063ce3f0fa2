"""
Reporting Layer — PDF Damage Assessment Report

Renders a ResultsView as a printable one-pager for insurers and
contractors. The report uses the stored analysis and estimate; nothing is
recomputed here.

Constraints:
- Smart filenames: DamageReport_{Address}_{YYYYMMDD_HHMM}.pdf
- Photos are not embedded; only the count is shown
"""

import logging
from datetime import datetime, timezone
from io import BytesIO
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm, inch
from reportlab.platypus import (
    HRFlowable,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from damage_aid.catalog import RiskLevel
from damage_aid.flow import ResultsView
from damage_aid.rules import BudgetMatch


logger = logging.getLogger(__name__)


RISK_COLORS = {
    RiskLevel.LOW: colors.HexColor('#10b981'),     # Green
    RiskLevel.MEDIUM: colors.HexColor('#f59e0b'),  # Amber
    RiskLevel.HIGH: colors.HexColor('#ef4444'),    # Red
}

BUDGET_COLORS = {
    BudgetMatch.WITHIN_BUDGET: colors.HexColor('#10b981'),
    BudgetMatch.CLOSE_TO_BUDGET: colors.HexColor('#f59e0b'),
    BudgetMatch.OVER_BUDGET: colors.HexColor('#ef4444'),
    BudgetMatch.UNKNOWN: colors.HexColor('#6b7280'),
}

HEADER_BG = colors.HexColor('#1e293b')
BORDER = colors.HexColor('#e5e7eb')


def generate_filename(address: Optional[str], timestamp: datetime) -> str:
    """
    Generate filename following pattern: DamageReport_{Address}_{YYYYMMDD_HHMM}.pdf
    """
    ts_str = timestamp.strftime('%Y%m%d_%H%M')
    safe_address = (address or "Unknown").strip()
    safe_address = "".join(c if c.isalnum() else "_" for c in safe_address)[:40].strip("_")
    return f"DamageReport_{safe_address or 'Unknown'}_{ts_str}.pdf"


def _format_currency(amount: int) -> str:
    return f"${amount:,}"


def generate_pdf_report(view: ResultsView) -> bytes:
    """
    Generate the damage assessment PDF.

    Sections:
    - Header: address and report date
    - Damage Analysis: type, severity, confidence, photo count
    - Health Risk Assessment: aggregate level and each risk with actions
    - Cost Estimation: estimated cost and budget status
    - Recommended Contractors
    - Emergency Contacts

    Args:
        view: Results view built by AssessmentSession.results()

    Returns:
        PDF file as bytes
    """
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=1.5*cm,
        leftMargin=1.5*cm,
        topMargin=1.5*cm,
        bottomMargin=1.5*cm
    )

    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'Title',
        parent=styles['Heading1'],
        fontSize=24,
        alignment=TA_CENTER,
        spaceAfter=6,
        textColor=colors.HexColor('#1f2937')
    )

    section_style = ParagraphStyle(
        'Section',
        parent=styles['Heading2'],
        fontSize=14,
        spaceBefore=12,
        spaceAfter=6,
        textColor=colors.HexColor('#374151')
    )

    body_style = styles['Normal']

    footer_style = ParagraphStyle(
        'Footer',
        parent=styles['Normal'],
        fontSize=8,
        textColor=colors.HexColor('#9ca3af'),
        alignment=TA_CENTER
    )

    estimate = view.estimate
    analysis = view.analysis
    address = view.profile.address if view.profile else "Address not provided"

    story = []

    # === HEADER ===
    story.append(Paragraph("DAMAGE ASSESSMENT REPORT", title_style))
    story.append(Spacer(1, 6))

    header_table = Table([[
        address,
        f"Report Date: {view.generated_at.strftime('%Y-%m-%d %H:%M UTC')}"
    ]], colWidths=[3.5*inch, 3.5*inch])
    header_table.setStyle(TableStyle([
        ('FONTSIZE', (0, 0), (-1, -1), 10),
        ('TEXTCOLOR', (0, 0), (-1, -1), colors.HexColor('#6b7280')),
        ('ALIGN', (0, 0), (0, 0), 'LEFT'),
        ('ALIGN', (1, 0), (1, 0), 'RIGHT'),
    ]))
    story.append(header_table)
    story.append(HRFlowable(width="100%", thickness=2, color=BORDER))
    story.append(Spacer(1, 12))

    # === DAMAGE ANALYSIS ===
    story.append(Paragraph("Damage Analysis", section_style))
    analysis_table = Table([
        ['Detected Damage', 'Severity Level', 'AI Confidence', 'Photos'],
        [analysis.type, analysis.severity, analysis.confidence, str(len(view.photos))],
    ], colWidths=[1.9*inch, 1.6*inch, 1.6*inch, 1.0*inch])
    analysis_table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_BG),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('BOX', (0, 0), (-1, -1), 1, BORDER),
        ('INNERGRID', (0, 0), (-1, -1), 0.5, BORDER),
        ('TOPPADDING', (0, 0), (-1, -1), 8),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
    ]))
    story.append(analysis_table)

    # === HEALTH RISKS ===
    risk_color = RISK_COLORS.get(estimate.risk_level, colors.gray)
    story.append(Paragraph(
        f"Health Risk Assessment — "
        f"<font color='{risk_color.hexval()}'>{estimate.risk_level.value.upper()} RISK</font>",
        section_style
    ))

    if estimate.health_risks:
        for risk in estimate.health_risks:
            level_color = RISK_COLORS.get(risk.level, colors.gray)
            story.append(Paragraph(
                f"<b>{escape(risk.type)}</b> "
                f"<font color='{level_color.hexval()}'>[{risk.level.value}]</font>",
                body_style
            ))
            story.append(Paragraph(escape(risk.description), body_style))
            for recommendation in risk.recommendations:
                story.append(Paragraph(f"&bull; {escape(recommendation)}", body_style))
            story.append(Spacer(1, 6))
    else:
        story.append(Paragraph(
            "<font color='#6b7280'><i>No specific health risks are catalogued for this damage type.</i></font>",
            body_style
        ))

    # === COST ESTIMATION ===
    story.append(Paragraph("Cost Estimation", section_style))
    budget_color = BUDGET_COLORS.get(estimate.budget_match, colors.gray)
    budget_text = view.profile.budget if view.profile else "Not provided"
    cost_table = Table([
        ['Estimated Repair Cost', 'Budget Range', 'Budget Status'],
        [_format_currency(estimate.estimated_cost), budget_text, estimate.budget_match.value],
    ], colWidths=[2.4*inch, 2.4*inch, 2.2*inch])
    cost_table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_BG),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('TEXTCOLOR', (2, 1), (2, 1), budget_color),
        ('FONTNAME', (2, 1), (2, 1), 'Helvetica-Bold'),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('BOX', (0, 0), (-1, -1), 1, BORDER),
        ('INNERGRID', (0, 0), (-1, -1), 0.5, BORDER),
        ('TOPPADDING', (0, 0), (-1, -1), 8),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
    ]))
    story.append(cost_table)

    # === CONTRACTORS ===
    story.append(Paragraph("Recommended Contractors", section_style))
    contractor_rows = [['Contractor', 'Specialty', 'Rating', 'Phone']]
    for contractor in estimate.contractors:
        contractor_rows.append([
            contractor.name, contractor.specialty, f"{contractor.rating:.1f}", contractor.phone
        ])
    contractor_table = Table(contractor_rows, colWidths=[2.4*inch, 1.8*inch, 0.8*inch, 2.0*inch])
    contractor_table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('BACKGROUND', (0, 0), (-1, 0), HEADER_BG),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('BOX', (0, 0), (-1, -1), 1, BORDER),
        ('INNERGRID', (0, 0), (-1, -1), 0.5, BORDER),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
    ]))
    story.append(contractor_table)

    # === EMERGENCY CONTACTS ===
    if view.emergency_contacts:
        story.append(Paragraph("Emergency Contacts", section_style))
        for contact in view.emergency_contacts:
            story.append(Paragraph(f"{escape(contact.name)}: <b>{contact.phone}</b>", body_style))

    story.append(Spacer(1, 20))

    # === FOOTER ===
    story.append(HRFlowable(width="100%", thickness=1, color=BORDER))
    story.append(Spacer(1, 8))
    story.append(Paragraph(
        f"Generated: {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')} | "
        f"Catalog: {estimate.catalog_version}",
        footer_style
    ))
    story.append(Paragraph(
        "Estimates and recommendations only. Not a substitute for professional "
        "inspection or medical advice.",
        footer_style
    ))

    doc.build(story)
    logger.info(f"PDF report generated ({len(estimate.health_risks)} risks, {len(view.photos)} photos)")

    return buffer.getvalue()
