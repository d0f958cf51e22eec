import io
from xml.sax.saxutils import escape
from datetime import date, timedelta

from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from mealplanner.domain.Plan import Plan
from mealplanner.utilities.constants import WEEKDAYS


def generate_pdf_for_plan(plan: Plan, monday: date) -> bytes:
    """Render the plan as a one-page table: Day / Date / Meal / Effort."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20,
        title="Meal Plan",
    )

    styles = getSampleStyleSheet()
    sunday = monday + timedelta(days=6)
    elements = [
        Paragraph(f"Meal Plan: {monday:%d %b} to {sunday:%d %b %Y}", styles["Title"]),
        Spacer(1, 16),
    ]

    data = [["Day", "Date", "Meal", "Effort"]]
    for index, day in enumerate(WEEKDAYS):
        meal = plan.get(day)
        when = (monday + timedelta(days=index)).strftime("%d/%m")
        if meal is None:
            data.append([day, when, "-", ""])
            continue
        name = f"{meal.name} *" if meal.red_meat else meal.name
        effort = "" if meal.is_placeholder else str(meal.relative_effort)
        data.append([day, when, Paragraph(escape(name), styles["Normal"]), effort])

    table = Table(data, repeatRows=1, colWidths=[100, 70, 480, 60])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (1,-1), "CENTER"),
        ("ALIGN", (3,0), (3,-1), "CENTER"),
        ("VALIGN", (0,0), (-1,-1), "MIDDLE"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))

    elements.append(table)
    if plan.red_meat_count():
        elements += [Spacer(1, 8), Paragraph("* contains red meat", styles["Italic"])]
    doc.build(elements)
    return buf.getvalue()
