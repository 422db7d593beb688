"""
Streamlit Frontend for the Currency Converter

This is the interface users work with: convert an amount, look back at
recent conversions, browse the supported currencies and, with the admin
password, add or remove currencies.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. The page only issues commands; all rules live in the core
3. Clear error messages in simple language
4. Results shown with two decimals, stored at full precision
"""

import streamlit as st

from currency_converter.config import get_settings
from currency_converter.models.commands import (
    AddCurrencyCommand,
    ConvertCommand,
    RemoveCurrencyCommand,
)
from currency_converter.orchestrator import (
    AdminFlow,
    ConversionFlow,
    create_app_components,
)
from currency_converter.services.storage import StorageError
from currency_converter.validation import CurrencyValidator


# Page configuration
st.set_page_config(
    page_title="MBANK Currency Converter",
    page_icon="💱",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .success-box {
        padding: 20px;
        background-color: #d4edda;
        border-radius: 10px;
        border-left: 5px solid #28a745;
        margin: 10px 0;
    }
    .error-box {
        padding: 20px;
        background-color: #f8d7da;
        border-radius: 10px;
        border-left: 5px solid #dc3545;
        margin: 10px 0;
    }
    .log-line {
        font-family: monospace;
        color: #b8860b;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_components():
    """Get or create application components (cached)."""
    return create_app_components()


def render_rate_table(conversion_flow: ConversionFlow):
    """Show the currency table, base currency first."""
    base = conversion_flow.base_currency.code
    rows = [
        {
            "Code": record.code,
            "Name": record.name,
            f"Rate (to {base})": f"1 {record.code} = {record.rate_to_base} {base}",
        }
        for record in conversion_flow.list_currencies()
    ]
    st.dataframe(rows, hide_index=True)


def main():
    """Main application entry point."""
    try:
        conversion_flow, admin_flow, _ = get_components()
    except Exception as e:
        st.error(f"Failed to initialize: {e}")
        st.stop()

    base = conversion_flow.base_currency.code

    # Sidebar navigation
    st.sidebar.title("💱 MBANK Converter")
    st.sidebar.markdown(f"Base currency: **{base}**")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        ["💱 Convert", "📜 Conversion Log", "📋 Currencies", "🔐 Admin", "⚙️ Settings"],
        index=0,
    )

    # Route to appropriate page
    if page == "💱 Convert":
        render_convert_page(conversion_flow)
    elif page == "📜 Conversion Log":
        render_log_page(conversion_flow)
    elif page == "📋 Currencies":
        render_currencies_page(conversion_flow)
    elif page == "🔐 Admin":
        render_admin_page(conversion_flow, admin_flow)
    elif page == "⚙️ Settings":
        render_settings_page()


def render_convert_page(conversion_flow: ConversionFlow):
    """Render the conversion page."""
    st.title("💱 Convert Currency")
    places = get_settings().app.display_decimal_places
    codes = [record.code for record in conversion_flow.list_currencies()]

    col1, col2, col3 = st.columns(3)
    with col1:
        from_code = st.selectbox("From currency", options=codes, index=0)
    with col2:
        to_code = st.selectbox("To currency", options=codes, index=min(1, len(codes) - 1))
    with col3:
        amount_text = st.text_input("Amount", value="1")

    if st.button("🔁 Convert", type="primary"):
        validator = CurrencyValidator(conversion_flow.base_currency.code)
        amount, issues = validator.parse_amount(amount_text)
        if issues:
            st.error(issues[0].message)
        else:
            outcome = conversion_flow.convert(ConvertCommand(
                from_code=from_code,
                to_code=to_code,
                amount=amount,
            ))
            if outcome.success:
                st.markdown(f"""
                <div class="success-box">
                    <h3>✔ {outcome.conversion.summary(places)}</h3>
                </div>
                """, unsafe_allow_html=True)
            else:
                st.markdown(f"""
                <div class="error-box">
                    <h4>ERROR</h4>
                    <p>{outcome.error_message}</p>
                </div>
                """, unsafe_allow_html=True)

    with st.expander("📋 Supported currencies"):
        render_rate_table(conversion_flow)


def render_log_page(conversion_flow: ConversionFlow):
    """Render the last lines of the conversion log."""
    st.title("📜 Conversion Log")
    default_lines = get_settings().app.recent_log_lines

    count = st.number_input(
        "How many last records?",
        min_value=1,
        value=default_lines,
        step=1,
    )

    if not conversion_flow.has_log():
        st.info("Log file does not exist yet.")
        return

    lines = conversion_flow.recent_conversions(int(count))
    if not lines:
        st.info("Log file is empty.")
        return

    for line in lines:
        st.markdown(f'<div class="log-line">{line}</div>', unsafe_allow_html=True)


def render_currencies_page(conversion_flow: ConversionFlow):
    """Render the supported currencies."""
    st.title("📋 Supported Currencies")
    render_rate_table(conversion_flow)
    if st.button("🔄 Refresh"):
        st.rerun()


def render_admin_page(conversion_flow: ConversionFlow, admin_flow: AdminFlow):
    """Render the password-protected admin page."""
    st.title("🔐 Manage Currencies")
    base = conversion_flow.base_currency.code

    if "is_admin" not in st.session_state:
        st.session_state.is_admin = False

    if not st.session_state.is_admin:
        password = st.text_input("Admin password", type="password")
        if st.button("🔓 Log in", type="primary"):
            if admin_flow.authenticate(password):
                st.session_state.is_admin = True
                st.rerun()
            else:
                st.error("Wrong password.")
        return

    if st.button("🔒 Log out"):
        st.session_state.is_admin = False
        st.rerun()

    render_rate_table(conversion_flow)
    st.markdown("---")

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("➕ Add currency")
        with st.form("add_currency", clear_on_submit=True):
            code = st.text_input("Code (e.g. CHF)")
            name = st.text_input("Name (e.g. Swiss Franc)")
            rate = st.text_input(f"Rate to {base} (1 CODE = ? {base})")
            submitted = st.form_submit_button("Add", type="primary")

        if submitted:
            try:
                outcome = admin_flow.add_currency(
                    AddCurrencyCommand(code=code, name=name, rate=rate)
                )
            except StorageError as e:
                st.error(f"Failed to save: {e}")
            else:
                if outcome.success:
                    st.success(f"✔ Currency {outcome.record.code} added successfully.")
                elif outcome.issues:
                    for issue in outcome.issues:
                        st.error(issue.message)
                else:
                    st.error(outcome.error_message)

    with col2:
        st.subheader("➖ Remove currency")
        removable = [
            record.code
            for record in conversion_flow.list_currencies()
            if record.code != base
        ]
        with st.form("remove_currency"):
            code = st.selectbox("Code to remove", options=removable)
            submitted = st.form_submit_button("Remove")

        if submitted and code:
            try:
                outcome = admin_flow.remove_currency(RemoveCurrencyCommand(code=code))
            except StorageError as e:
                st.error(f"Failed to save: {e}")
            else:
                if outcome.success:
                    st.success(f"✔ Currency {outcome.record.code} removed successfully.")
                else:
                    st.error(outcome.error_message)


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    from currency_converter.config import validate_all_settings

    status = validate_all_settings()

    sections = [
        ("Base currency and default rates", "currency"),
        ("Admin", "admin"),
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
    st.markdown("---")
    st.markdown("### Files")
    st.markdown(f"- Currencies: `{storage.currency_file_path}`")
    st.markdown(f"- Base currency: `{storage.base_currency_file_path}`")
    st.markdown(f"- Conversion log: `{storage.log_file_path}`")
    st.markdown(
        "To configure the application, create a `.env` file. "
        "See `.env.example` for the available variables."
    )


if __name__ == "__main__":
    main()
