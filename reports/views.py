"""
==============================================================================
REPORTS APP - VIEWS
==============================================================================
PDF report generation using ReportLab.

Reports:
    - Receipt: Purchase receipt for one order (buyer or admin)
    - Earnings Summary: Platform and per-creator earnings (admin only)

Author: LusionBeatz Development Team
==============================================================================
"""

import io
from decimal import Decimal

from django.contrib.auth.decorators import login_required
from django.db.models import Count, Sum
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.utils.html import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.models import Order, OrderItem

BRAND_COLOR = colors.HexColor('#6a1b9a')


# =============================================================================
# STYLE DEFINITIONS
# =============================================================================

def get_custom_styles():
    """Get custom styles for PDF generation."""
    styles = getSampleStyleSheet()

    styles.add(ParagraphStyle(
        name='CustomTitle',
        parent=styles['Heading1'],
        fontSize=24,
        textColor=BRAND_COLOR,
        spaceAfter=30,
        alignment=TA_CENTER,
    ))

    styles.add(ParagraphStyle(
        name='Subtitle',
        parent=styles['Normal'],
        fontSize=12,
        textColor=colors.grey,
        alignment=TA_CENTER,
        spaceAfter=20,
    ))

    styles.add(ParagraphStyle(
        name='SectionHeader',
        parent=styles['Heading2'],
        fontSize=14,
        textColor=BRAND_COLOR,
        spaceBefore=20,
        spaceAfter=10,
    ))

    styles.add(ParagraphStyle(
        name='InfoText',
        parent=styles['Normal'],
        fontSize=10,
        textColor=colors.black,
    ))

    return styles


def get_table_style():
    """Get standard table style."""
    return TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), BRAND_COLOR),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, 0), 10),
        ('BOTTOMPADDING', (0, 0), (-1, 0), 12),
        ('BACKGROUND', (0, 1), (-1, -1), colors.white),
        ('TEXTCOLOR', (0, 1), (-1, -1), colors.black),
        ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
        ('FONTSIZE', (0, 1), (-1, -1), 9),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('TOPPADDING', (0, 1), (-1, -1), 8),
        ('BOTTOMPADDING', (0, 1), (-1, -1), 8),
    ])


def header(elements, styles, title, subtitle):
    elements.append(Paragraph('LusionBeatz', styles['CustomTitle']))
    elements.append(Paragraph(subtitle, styles['Subtitle']))
    elements.append(HRFlowable(width="100%", thickness=2, color=BRAND_COLOR))
    elements.append(Spacer(1, 20))
    elements.append(Paragraph(title, styles['SectionHeader']))


def footer(elements, styles):
    elements.append(Spacer(1, 30))
    elements.append(HRFlowable(width="100%", thickness=1, color=colors.grey))
    elements.append(Paragraph(
        f'Generated on {timezone.localdate().strftime("%d %B %Y")} | LusionBeatz Sample Marketplace',
        styles['Subtitle']
    ))


def pdf_response(elements, filename):
    """Build the document into memory and return it as a download."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4, topMargin=1*cm, bottomMargin=1*cm)
    doc.build(elements)

    buffer.seek(0)
    response = HttpResponse(buffer, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


# =============================================================================
# PURCHASE RECEIPT
# =============================================================================

@login_required
def order_receipt(request, order_id):
    """
    Generate PDF receipt for an order.

    Includes:
    - Order number, date and UTR
    - Purchased samples with prices
    - Total paid
    """
    order = get_object_or_404(Order.objects.select_related('buyer'), pk=order_id)

    # Access control
    user = request.user
    if user.role != 'admin' and order.buyer_id != user.pk:
        return HttpResponse('Access denied', status=403)

    styles = get_custom_styles()
    elements = []
    header(elements, styles, 'PURCHASE RECEIPT', 'Music Sample Marketplace')

    created = timezone.localtime(order.created_at)
    elements.append(Paragraph(f'Order Number: {order.order_number}', styles['InfoText']))
    elements.append(Paragraph(f'Date: {created.strftime("%d %B %Y, %H:%M")}', styles['InfoText']))
    buyer = order.buyer
    buyer_line = f'{buyer.name or buyer.email} ({buyer.email})' if buyer else 'Deleted account'
    elements.append(Paragraph(escape(f'Buyer: {buyer_line}'), styles['InfoText']))
    elements.append(Paragraph(escape(f'UPI Transaction Reference (UTR): {order.utr}'), styles['InfoText']))
    elements.append(Spacer(1, 20))

    elements.append(Paragraph('Purchased Samples', styles['SectionHeader']))
    items_data = [['#', 'Sample', 'Price']]
    for idx, item in enumerate(order.items.all(), 1):
        items_data.append([str(idx), item.sample_title, f'Rs.{item.price:.2f}'])
    items_data.append(['', 'Total Paid:', f'Rs.{order.amount:.2f}'])

    items_table = Table(items_data, colWidths=[40, 320, 120])
    items_table.setStyle(get_table_style())
    items_table.setStyle(TableStyle([
        ('FONTNAME', (0, -1), (-1, -1), 'Helvetica-Bold'),
        ('BACKGROUND', (0, -1), (-1, -1), colors.HexColor('#f5f5f5')),
    ]))
    elements.append(items_table)

    footer(elements, styles)
    return pdf_response(elements, f'Receipt_{order.order_number}.pdf')


# =============================================================================
# EARNINGS SUMMARY
# =============================================================================

@login_required
def earnings_summary(request):
    """
    Generate earnings summary for the whole platform.

    Admin only. Lists total revenue, the platform commission and what is
    owed to each creator.
    """
    if request.user.role != 'admin':
        return HttpResponse('Access denied', status=403)

    totals = Order.objects.aggregate(
        orders=Count('id'),
        revenue=Sum('amount'),
        platform=Sum('platform_earning'),
        creators=Sum('creator_earning'),
    )
    zero = Decimal('0.00')

    styles = get_custom_styles()
    elements = []
    header(elements, styles, 'EARNINGS SUMMARY', f'Generated: {timezone.localdate().strftime("%d %B %Y")}')

    summary_data = [
        ['Platform Totals', ''],
        ['Orders', str(totals['orders'])],
        ['Total Revenue', f"Rs.{totals['revenue'] or zero:.2f}"],
        ['Platform Commission', f"Rs.{totals['platform'] or zero:.2f}"],
        ['Owed to Creators', f"Rs.{totals['creators'] or zero:.2f}"],
    ]
    summary_table = Table(summary_data, colWidths=[250, 250])
    summary_table.setStyle(get_table_style())
    elements.append(summary_table)
    elements.append(Spacer(1, 20))

    per_creator = (
        OrderItem.objects.filter(creator__isnull=False)
        .values('creator__name', 'creator__email')
        .annotate(sales=Count('id'), gross=Sum('price'), earning=Sum('creator_earning'))
        .order_by('-earning')
    )

    elements.append(Paragraph('Creator Earnings', styles['SectionHeader']))
    if per_creator:
        creator_data = [['Creator', 'Email', 'Sales', 'Gross', 'Earning']]
        for row in per_creator:
            creator_data.append([
                row['creator__name'] or '-',
                row['creator__email'],
                str(row['sales']),
                f"Rs.{row['gross']:.2f}",
                f"Rs.{row['earning']:.2f}",
            ])
        creator_table = Table(creator_data, colWidths=[100, 170, 50, 80, 80])
        creator_table.setStyle(get_table_style())
        elements.append(creator_table)
    else:
        elements.append(Paragraph('No sales yet.', styles['InfoText']))

    footer(elements, styles)
    return pdf_response(elements, 'Earnings_Summary.pdf')
