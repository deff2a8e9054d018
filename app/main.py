"""
Streamlit Frontend for Roadshow Savings Tracker

This is the screen the salesman and their manager use to record shows
and see what was saved against budget.

DESIGN PRINCIPLES:
1. Every figure on screen is recomputed from the stored shows
2. Every change is saved immediately - there is no "save all" button
3. Storage problems are shown once and can be dismissed
4. No hidden actions

Views:
- Dashboard: aggregate totals and one card per show
- Show detail: financial summary, cost breakdown, notes
- Add / edit form
- Activity log and settings in the sidebar
"""

import html

import streamlit as st
from pydantic import ValidationError

from roadshow import ui_state
from roadshow.config import get_settings, validate_all_settings
from roadshow.formatting import escape_markdown, format_money
from roadshow.models.show import Show, ShowInput
from roadshow.store import ShowStore, create_store


# Page configuration
st.set_page_config(
    page_title="Savings Tracker",
    page_icon="💼",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .savings-positive {
        color: #16a34a;
        font-weight: bold;
    }
    .savings-negative {
        color: #dc2626;
        font-weight: bold;
    }
    .notes-box {
        padding: 16px;
        background-color: #f8fafc;
        border-radius: 8px;
        white-space: pre-wrap;
        min-height: 120px;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_store() -> ShowStore:
    """Get or create the show store (cached for the server process)."""
    return create_store()


def money(value: float) -> str:
    """Format an amount the way the dashboard shows it."""
    return format_money(value, get_settings().app.currency_symbol)


def money_md(value: float) -> str:
    """An amount safe to put inside Markdown text."""
    return escape_markdown(money(value))


def title_md(show: Show) -> str:
    return escape_markdown(show.destination) if show.destination else "Untitled show"


def main():
    """Main application entry point."""
    ui_state.init_session_state(st.session_state)
    store = get_store()

    # Sidebar navigation
    st.sidebar.title("💼 Savings Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["📊 Shows", "🕑 Activity", "⚙️ Settings"],
        index=0,
    )

    rates = store.rates
    st.sidebar.markdown("---")
    st.sidebar.markdown(
        f"""
        **Budget rules:**
        - Sleeping rooms: {money_md(rates.room_rate_per_night)} per night
        - Meeting space: {money_md(rates.meeting_rate_per_day)} per day
        - Commission: {rates.commission_rate:.0%} of savings
        """
    )

    render_error_banner(store)

    # Route to appropriate page
    if page == "📊 Shows":
        if st.session_state.view == "form":
            render_form_page(store)
        elif st.session_state.view == "detail":
            render_detail_page(store)
        else:
            render_list_page(store)
    elif page == "🕑 Activity":
        render_activity_page(store)
    elif page == "⚙️ Settings":
        render_settings_page(store)


def render_error_banner(store: ShowStore):
    """Show the last storage error until the user dismisses it."""
    if not store.error:
        return
    col1, col2 = st.columns([5, 1])
    with col1:
        st.error(store.error)
    with col2:
        if st.button("Dismiss", key="dismiss_error"):
            store.dismiss_error()
            st.rerun()


def render_dashboard(store: ShowStore):
    """Aggregate totals across every show."""
    totals = store.totals

    st.subheader("Aggregate Totals")
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Savings", money(totals.total_savings))
    col2.metric("Total Commissions", money(totals.total_commission))
    col3.metric("Total Shows Tracked", totals.show_count)
    col4.metric("Total Spent", money(totals.total_spent))
    st.caption(f"Total budgeted: {money_md(totals.total_budgeted)}")


def render_list_page(store: ShowStore):
    """Render the dashboard and the list of shows."""
    col1, col2 = st.columns([4, 1])
    with col1:
        st.title("Savings Tracker")
        st.markdown("Monitor roadshow expenses and salesman commissions.")
    with col2:
        if st.button("➕ Add New Show", type="primary"):
            ui_state.open_form(st.session_state)
            st.rerun()

    render_dashboard(store)
    st.markdown("---")
    st.subheader("All Shows")

    shows = store.shows
    if not shows:
        st.info(
            "📋 No shows tracked yet. "
            "Use 'Add New Show' to record your first roadshow."
        )
        return

    columns = st.columns(3)
    for index, show in enumerate(shows):
        with columns[index % 3]:
            render_show_card(store, show)


def render_show_card(store: ShowStore, show: Show):
    """One show in the grid."""
    metrics = store.metrics_for(show)
    savings_class = "savings-negative" if metrics.is_overspend else "savings-positive"

    with st.container(border=True):
        st.markdown(f"### {title_md(show)}")
        st.caption(show.created_at.strftime("%d %B %Y"))
        st.markdown(
            f'<span class="{savings_class}">{money_md(metrics.savings)} Saved</span>',
            unsafe_allow_html=True,
        )
        col1, col2 = st.columns(2)
        col1.metric("Commission", money(metrics.commission))
        col2.metric("Actual Spend", money(metrics.actual_spend))
        if st.button("View details", key=f"view_{show.id}"):
            ui_state.open_detail(st.session_state, show.id)
            st.rerun()


def render_detail_page(store: ShowStore):
    """Render one show in full."""
    show = ui_state.detail_target(store, st.session_state)
    if show is None:
        st.rerun()
        return

    metrics = store.metrics_for(show)

    if st.button("← Back to All Shows"):
        ui_state.go_to_list(st.session_state)
        st.rerun()

    col1, col2, col3 = st.columns([4, 1, 1])
    with col1:
        st.title(title_md(show))
        st.caption(f"Recorded {show.created_at.strftime('%d %B %Y, %H:%M')} UTC")
    with col2:
        if st.button("✏️ Edit"):
            ui_state.open_form(st.session_state, show.id)
            st.rerun()
    with col3:
        if st.button("🗑️ Delete"):
            ui_state.delete_show(store, st.session_state, show.id)
            st.rerun()

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Financial Summary")
        if metrics.is_overspend:
            st.error(f"Total Savings: {money_md(metrics.savings)}")
        else:
            st.success(f"Total Savings: {money_md(metrics.savings)}")
        st.info(f"Salesman Commission: {money_md(metrics.commission)}")
        st.markdown(f"**Total Budget:** {money_md(metrics.total_budget)}")
        st.markdown(f"**Actual Spend:** {money_md(metrics.actual_spend)}")

    with col2:
        st.subheader("Cost Breakdown")
        st.markdown(
            f"**Sleeping Rooms ({show.nights} nights):** "
            f"{money_md(show.actual_room_cost)} "
            f"(budget {money_md(metrics.room_budget)})"
        )
        st.markdown(
            f"**Meeting Spaces ({show.meeting_days} days):** "
            f"{money_md(show.actual_meeting_cost)} "
            f"(budget {money_md(metrics.meeting_budget)})"
        )

    st.subheader("Notes")
    if show.notes:
        st.markdown(f'<div class="notes-box">{html.escape(show.notes)}</div>', unsafe_allow_html=True)
    else:
        st.caption("No notes provided.")


def count_input(label: str, value):
    """
    Whole-number input for nights and days.

    Older records can hold fractions; those are shown as they are and
    must be corrected before the form will save.
    """
    if isinstance(value, float):
        return st.number_input(label, value=value, min_value=0.0, step=1.0)
    return st.number_input(label, value=value, min_value=0, step=1)


def render_form_page(store: ShowStore):
    """Render the add / edit form."""
    ready, editing = ui_state.form_target(store, st.session_state)
    if not ready:
        st.rerun()
        return

    st.title("Edit Show" if editing else "Add New Show")

    with st.form("show_form"):
        destination = st.text_input(
            "Destination / Show Name *",
            value=editing.destination if editing else "",
        )

        col1, col2 = st.columns(2)
        with col1:
            nights = count_input(
                "Nights for Sleeping Rooms *",
                editing.nights if editing else 0,
            )
            actual_room_cost = st.number_input(
                f"Actual Room Cost ({get_settings().app.currency_symbol}) *",
                value=float(editing.actual_room_cost) if editing else 0.0,
                min_value=0.0,
                step=0.01,
                format="%.2f",
                help="e.g., 1500.50",
            )
        with col2:
            meeting_days = count_input(
                "Days for Meeting Space *",
                editing.meeting_days if editing else 0,
            )
            actual_meeting_cost = st.number_input(
                f"Actual Meeting Cost ({get_settings().app.currency_symbol}) *",
                value=float(editing.actual_meeting_cost) if editing else 0.0,
                min_value=0.0,
                step=0.01,
                format="%.2f",
                help="e.g., 800",
            )

        notes = st.text_area(
            "Notes",
            value=editing.notes if editing else "",
            placeholder="Add any relevant notes here...",
        )

        col1, col2 = st.columns(2)
        with col1:
            submitted = st.form_submit_button("💾 Save Show", type="primary")
        with col2:
            cancelled = st.form_submit_button("Cancel")

    if cancelled:
        ui_state.go_to_list(st.session_state)
        st.rerun()

    if submitted:
        try:
            data = ShowInput(
                destination=destination,
                nights=nights,
                meeting_days=meeting_days,
                actual_room_cost=actual_room_cost,
                actual_meeting_cost=actual_meeting_cost,
                notes=notes,
            )
        except ValidationError as e:
            for error in e.errors():
                st.error(error["msg"])
            return

        if editing:
            if store.update(editing.id, data) is None:
                st.warning("This show was deleted before your changes were saved.")
                return
        else:
            store.create(data)
        ui_state.go_to_list(st.session_state)
        st.rerun()


def render_activity_page(store: ShowStore):
    """Render the recent activity log."""
    st.title("🕑 Activity")
    st.markdown("Recent changes and storage events.")

    events = store.audit_logger.recent_events(limit=50)
    if not events:
        st.info("No activity yet.")
        return

    for event in events:
        stamp = event.timestamp.strftime("%Y-%m-%d %H:%M:%S")
        line = f"`{stamp}` {escape_markdown(event.description)}"
        if event.severity.value in ("error", "critical"):
            st.error(line)
        elif event.severity.value == "warning":
            st.warning(line)
        else:
            st.markdown(line)


def render_settings_page(store: ShowStore):
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    status = validate_all_settings()

    sections = [
        ("Budget rates", "rates"),
        ("Storage", "storage"),
        ("Application", "app"),
    ]

    for name, key in sections:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    storage = get_settings().storage
    st.markdown("### Storage")
    st.markdown(f"**Backend:** {storage.backend}")
    if storage.backend == "file":
        st.markdown(f"**Data directory:** `{storage.data_dir}`")
    st.markdown(f"**Key:** `{storage.key}`")
    st.markdown(f"**Shows stored:** {len(store)}")

    st.markdown("---")
    st.markdown("### Configuration")
    st.markdown(
        "Rates and storage are read from environment variables or a `.env` "
        "file, e.g. `ROADSHOW_COMMISSION_RATE=0.25`. Restart the app after "
        "changing them."
    )


if __name__ == "__main__":
    main()
