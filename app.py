"""Streamlit application: open a document, highlight a query, step through matches"""

import streamlit as st
import streamlit.components.v1 as components

from core.fetcher import DocumentFetcher
from core.highlighter import DocumentHighlighter
from core.result_processor import ResultProcessor
from core.search_manager import SearchManager
from core.settings_manager import SettingsManager
from config import Config
from utils.helpers import clean_filename, configure_logging, validate_query

configure_logging()

# Page configuration
st.set_page_config(
    page_title=Config.PAGE_TITLE,
    page_icon=Config.PAGE_ICON,
    layout=Config.LAYOUT
)

# Initialize session state
if 'user_settings' not in st.session_state:
    st.session_state.user_settings = SettingsManager.load_settings()
if 'settings_changed' not in st.session_state:
    st.session_state.settings_changed = False
if 'prevent_rerun' not in st.session_state:
    st.session_state.prevent_rerun = False
if 'scroll_target' not in st.session_state:
    st.session_state.scroll_target = -1


def remember_scroll_target(index, match):
    """Scroll port: the panel script centers whatever index is stored here"""
    st.session_state.scroll_target = index


def build_search_manager() -> SearchManager:
    """Create a search manager wired to the current settings"""
    settings = st.session_state.user_settings
    fetcher = DocumentFetcher(
        base_url=settings.proxy.base_url,
        timeout=settings.proxy.timeout
    )
    return SearchManager(
        fetcher=fetcher,
        scroll_port=remember_scroll_target,
        min_length=settings.search.min_query_length,
        discard_stale=settings.search.discard_stale_responses
    )


def render_match_table(manager: SearchManager):
    """Match list with Excel export"""
    outcome = manager.outcome
    if outcome is None or not outcome.matches:
        return

    processor = ResultProcessor()
    summaries = processor.summarize(outcome)

    with st.expander(f"📋 Match List ({len(summaries)})", expanded=False):
        st.dataframe(processor.to_dataframe(summaries), use_container_width=True, hide_index=True)

        if st.button("📥 Export to Excel", key='export_excel_btn'):
            try:
                Config.ensure_directories()
                excel_file = Config.OUTPUT_DIR / f"matches_{clean_filename(outcome.query)}.xlsx"
                processor.export_to_excel(summaries, excel_file)

                with open(excel_file, 'rb') as f:
                    st.download_button(
                        label="📥 Download Excel Report",
                        data=f,
                        file_name=excel_file.name,
                        mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                        key='download_excel_report'
                    )
            except OSError as e:
                st.error(f"Error exporting: {e}")


def render_panel(manager: SearchManager):
    """The popup: controls, counter and the highlighted document"""
    navigator = manager.navigator

    with st.container(border=True):
        col1, col2, col3, col4 = st.columns([1, 1, 1, 1])

        with col1:
            if st.button("✖ Close", key='close_panel_btn'):
                manager.close()
                st.rerun()

        with col2:
            if st.button("◀ Prev", key='prev_match_btn', disabled=not navigator.has_matches,
                         use_container_width=True):
                navigator.prev()

        with col4:
            if st.button("Next ▶", key='next_match_btn', disabled=not navigator.has_matches,
                         use_container_width=True):
                navigator.next()

        # Rendered after the buttons so the counter reflects this run's click
        with col3:
            st.markdown(f"**{navigator.counter_label()}**")

        highlighter = DocumentHighlighter()
        components.html(
            highlighter.render_panel_html(manager.outcome, st.session_state.scroll_target),
            height=Config.PANEL_HEIGHT,
            scrolling=True
        )

    render_match_table(manager)


def render_search_tab():
    """Query input, Open button and the panel"""
    if 'search_manager' not in st.session_state:
        st.session_state.search_manager = build_search_manager()
    manager = st.session_state.search_manager

    query = st.text_input(
        "🔍 Search",
        placeholder="Search...",
        help=f"At least {Config.MIN_QUERY_LENGTH} characters, matched case-insensitively",
        key='search_text'
    )

    if st.button("📂 Open", type="primary", key='open_btn'):
        is_valid, message = validate_query(query, manager.min_length)
        if not is_valid:
            st.info(message)
        else:
            st.session_state.scroll_target = -1
            with st.spinner("Fetching document..."):
                opened = manager.open(query)
            if not opened and manager.last_error:
                st.error(f"Could not load the document: {manager.last_error}")
    elif manager.is_open and query != manager.query:
        # Typing while the panel is open searches again; too-short queries keep the highlights
        previous = manager.outcome
        if manager.set_query(query) is not previous:
            st.session_state.scroll_target = manager.navigator.current_index

    if manager.is_open and manager.outcome is not None:
        if manager.outcome.match_count:
            st.caption(f"{manager.outcome.match_count} matches for \"{manager.outcome.query}\"")
        render_panel(manager)


def render_settings_tab():
    """Render the settings tab with all configuration options"""
    st.header("⚙️ Settings")

    settings = st.session_state.user_settings

    # Preset selection
    st.subheader("📊 Preset")

    preset_labels = {
        'default': '⚖️ Default',
        'compact': '🔋 Compact panel',
        'large_panel': '🖥️ Large panel'
    }
    preset_options = {
        name: preset_labels.get(name, name.replace('_', ' ').title())
        for name in SettingsManager.get_preset_names()
    }
    preset_options['custom'] = '🎛️ Custom (configure manually)'

    current_profile = settings.profile if settings.profile in preset_options else 'custom'

    selected_profile = st.selectbox(
        "Choose a preset:",
        options=list(preset_options.keys()),
        format_func=lambda x: preset_options[x],
        index=list(preset_options.keys()).index(current_profile),
        key='profile_selector'
    )

    if selected_profile != 'custom' and selected_profile != current_profile and not st.session_state.prevent_rerun:
        st.session_state.user_settings = SettingsManager.get_preset(selected_profile)
        st.session_state.settings_changed = True
        st.session_state.prevent_rerun = True
        st.rerun()

    if st.session_state.prevent_rerun:
        st.session_state.prevent_rerun = False

    st.markdown("---")

    # Proxy settings
    st.subheader("🌐 Document Source")

    col1, col2 = st.columns(2)

    with col1:
        base_url = st.text_input(
            "Proxy Base URL",
            value=settings.proxy.base_url,
            help=f"The document is fetched from <base URL>{Config.PROXY_ENDPOINT}",
            key='proxy_base_url_input'
        )

    with col2:
        timeout = st.slider(
            "Fetch Timeout (seconds)",
            min_value=5,
            max_value=120,
            value=settings.proxy.timeout,
            key='fetch_timeout_slider'
        )

    if base_url != settings.proxy.base_url or timeout != settings.proxy.timeout:
        settings.proxy.base_url = base_url
        settings.proxy.timeout = timeout
        settings.profile = 'custom'
        st.session_state.settings_changed = True

    st.markdown("---")

    # Search settings
    st.subheader("🔍 Search")

    col1, col2 = st.columns(2)

    with col1:
        min_length = st.slider(
            "Minimum Query Length",
            min_value=Config.MIN_QUERY_LENGTH_FLOOR,
            max_value=10,
            value=settings.search.min_query_length,
            help="Shorter queries are ignored",
            key='min_length_slider'
        )

    with col2:
        discard_stale = st.checkbox(
            "Discard Stale Responses",
            value=settings.search.discard_stale_responses,
            help="Drop a fetched document if a newer fetch was started after it",
            key='discard_stale_checkbox'
        )

    if (min_length != settings.search.min_query_length or
        discard_stale != settings.search.discard_stale_responses):
        settings.search.min_query_length = min_length
        settings.search.discard_stale_responses = discard_stale
        settings.profile = 'custom'
        st.session_state.settings_changed = True

    st.markdown("---")

    # Display settings
    st.subheader("📝 Display")

    col1, col2 = st.columns(2)

    with col1:
        panel_height = st.slider(
            "Panel Height (px)",
            min_value=200,
            max_value=1500,
            value=settings.display.panel_height,
            step=50,
            key='panel_height_slider'
        )

        context_chars = st.slider(
            "Match List Context (characters)",
            min_value=10,
            max_value=300,
            value=settings.display.context_chars,
            key='context_chars_slider'
        )

    with col2:
        highlight_background = st.color_picker(
            "Highlight Color",
            value=_as_hex(settings.display.highlight_background, "#FFFF00"),
            key='highlight_color_picker'
        )

        current_background = st.color_picker(
            "Current Match Color",
            value=_as_hex(settings.display.current_match_background, "#FFA500"),
            key='current_color_picker'
        )

    if (panel_height != settings.display.panel_height or
        context_chars != settings.display.context_chars or
        highlight_background != _as_hex(settings.display.highlight_background, "#FFFF00") or
        current_background != _as_hex(settings.display.current_match_background, "#FFA500")):
        settings.display.panel_height = panel_height
        settings.display.context_chars = context_chars
        settings.display.highlight_background = highlight_background
        settings.display.current_match_background = current_background
        settings.profile = 'custom'
        st.session_state.settings_changed = True

    st.markdown("---")

    # Action Buttons
    col1, col2, col3 = st.columns(3)

    with col1:
        if st.button("💾 Save Settings", use_container_width=True, key='save_settings_button'):
            SettingsManager.save_settings(settings)
            Config.apply_user_settings(settings)
            st.session_state.search_manager = build_search_manager()
            st.session_state.settings_changed = False
            st.success("✅ Settings saved!")

    with col2:
        if st.button("🔄 Reset to Default", use_container_width=True, key='reset_settings_button'):
            st.session_state.user_settings = SettingsManager.get_preset('default')
            SettingsManager.save_settings(st.session_state.user_settings)
            Config.apply_user_settings(st.session_state.user_settings)
            st.session_state.search_manager = build_search_manager()
            st.session_state.settings_changed = False
            st.success("✅ Reset to default settings!")

    with col3:
        if st.button("↩️ Discard Changes", use_container_width=True, key='discard_changes_button'):
            st.session_state.user_settings = SettingsManager.load_settings()
            st.session_state.settings_changed = False
            st.info("ℹ️ Changes discarded")

    if st.session_state.settings_changed:
        st.warning("⚠️ You have unsaved changes. Click 'Save Settings' to apply them.")


def _as_hex(color: str, fallback: str) -> str:
    """color_picker only accepts #RRGGBB values"""
    if color.startswith('#') and len(color) == 7:
        return color
    return fallback


def main():
    """Main application"""

    # Apply current settings to Config
    try:
        Config.apply_user_settings(st.session_state.user_settings)
    except (AttributeError, TypeError) as e:
        st.error(f"Error applying settings: {e}")
        st.session_state.user_settings = SettingsManager.get_preset('default')
        Config.apply_user_settings(st.session_state.user_settings)

    # Header
    st.title(Config.PAGE_TITLE)
    st.markdown("Open the filing, **highlight every occurrence** of your search term and step through the matches")

    tab1, tab2 = st.tabs(["🔍 Search", "⚙️ Settings"])

    with tab1:
        render_search_tab()

    with tab2:
        render_settings_tab()


if __name__ == "__main__":
    main()
