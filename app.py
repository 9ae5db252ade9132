"""
InvoiceDesk Web App — simple dashboard for the business owner.

Run locally:
    streamlit run app.py
"""

from datetime import date, datetime

import streamlit as st

st.set_page_config(
    page_title="InvoiceDesk — Small-Business Invoicing",
    page_icon="🧾",
    layout="wide",
)


@st.cache_resource
def get_desk():
    from invoicedesk import InvoiceDesk

    return InvoiceDesk.from_config("invoicedesk.yaml")


def main():
    from invoicedesk.calculators import DashboardAggregator
    from invoicedesk.formatting import format_currency

    desk = get_desk()
    profile = desk.business_profile()
    now = datetime.now()

    st.markdown(f"""
    <div style="text-align: center; padding: 1rem 0;">
        <h1>🧾 {profile.company_name}</h1>
        <p>Clients, invoices and payments in one place.</p>
    </div>
    """, unsafe_allow_html=True)

    with st.sidebar:
        st.header("⚙️ Actions")

        if st.button("Load sample data", help="Only works while the data store is empty"):
            if desk.initialize_sample_data():
                st.success("Sample data created")
            else:
                st.info("Data store already has data")

        if st.button("Mark overdue invoices", help="Move past-due sent invoices to overdue"):
            changed = desk.reconcile_overdue(now)
            st.success(f"{changed} invoice(s) marked overdue")

        st.divider()
        st.download_button(
            "Download backup (JSON)",
            desk.export_data(now).model_dump_json(indent=2),
            file_name=f"invoicedesk-backup-{date.today().isoformat()}.json",
            mime="application/json",
        )

    stats = desk.dashboard(now)
    def money(amount):
        return format_currency(amount, profile.currency)

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Total Revenue", money(stats.total_revenue))
    with col2:
        st.metric("This Month", money(stats.monthly_revenue))
    with col3:
        st.metric("Pending Invoices", stats.pending_invoices)
    with col4:
        st.metric(
            "Overdue",
            stats.overdue_invoices,
            delta=money(stats.overdue_amount) if stats.overdue_invoices else None,
            delta_color="inverse",
        )

    st.divider()

    invoices = desk.list_invoices()
    chart_col, recent_col = st.columns([2, 1])

    with chart_col:
        st.subheader("📈 Paid revenue by month")
        series = DashboardAggregator.revenue_by_month(invoices, now.year)
        st.bar_chart({"Revenue": [float(v) for v in series]})

    with recent_col:
        st.subheader("🕒 Recent invoices")
        display_invoices(desk, DashboardAggregator.recent(invoices), money)

    st.divider()
    st.subheader("📋 All invoices")
    display_invoices(desk, invoices, money)


def display_invoices(desk, invoices, money):
    """Render invoices as a table."""
    from invoicedesk.formatting import format_date_short, status_label

    if not invoices:
        st.info("No invoices yet")
        return

    clients = {c.id: c for c in desk.list_clients()}
    rows = []
    for inv in invoices:
        client = clients.get(inv.client_id)
        rows.append({
            "Number": inv.invoice_number,
            "Client": client.display_name if client else "Unknown Client",
            "Due": format_date_short(inv.due_date),
            "Status": status_label(inv.status),
            "Total": money(inv.total),
        })
    st.table(rows)


if __name__ == "__main__":
    main()
