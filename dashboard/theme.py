import streamlit as st

THEME_PRESETS = {
    "dark": {
        "bg_main": "#121017",
        "bg_glow": "#1f1a2a",
        "bg_card": "#1e1a27",
        "border": "#5b4f70",
        "text_main": "#f3edf9",
        "text_soft": "#c8bbd8",
        "accent": "#8e79af",
        "success": "#7fb89a",
        "warning": "#e0a96d",
        "danger": "#d9777c",
        "plot_grid": "#3d3550",
        "plot_marker_line": "#ddd1ea",
        "heat_empty": "#2a2335",
        "heat_full": "#8e79af",
    },
    "light": {
        "bg_main": "#f7f3ed",
        "bg_glow": "#eee2d3",
        "bg_card": "#fff9f1",
        "border": "#c4b59f",
        "text_main": "#1b1b1b",
        "text_soft": "#5d5d5d",
        "accent": "#8f7aa9",
        "success": "#4f9a72",
        "warning": "#c5843c",
        "danger": "#b8545a",
        "plot_grid": "#d9ccbb",
        "plot_marker_line": "#ffffff",
        "heat_empty": "#efe6d8",
        "heat_full": "#8f7aa9",
    },
}


def ensure_theme_state():
    if st.session_state.get("ui_theme") not in THEME_PRESETS:
        st.session_state["ui_theme"] = "dark"
    return st.session_state["ui_theme"]


def get_active_theme():
    name = ensure_theme_state()
    return name, THEME_PRESETS[name]


def toggle_theme():
    name = ensure_theme_state()
    st.session_state["ui_theme"] = "light" if name == "dark" else "dark"


def inject_theme_css() -> dict:
    active_name, theme = get_active_theme()
    st.markdown(
        f"""
<style>
@import url('https://fonts.googleapis.com/css2?family=Crimson+Text:wght@400;600&family=IBM+Plex+Sans:wght@300;400;500&display=swap');

html, body, [class*="css"] {{
    font-family: 'IBM Plex Sans', sans-serif;
    color: {theme['text_main']};
}}

h1, h2, h3, .page-title {{
    font-family: 'Crimson Text', serif;
    letter-spacing: 0.4px;
}}

.stApp {{
    background: radial-gradient(1400px 900px at 20% 0%, {theme['bg_glow']} 0%, {theme['bg_main']} 58%);
    color: {theme['text_main']};
}}

.section-title {{
    font-size: 14px;
    font-weight: 600;
    margin: 0 0 8px 0;
}}

.small-label {{
    color: {theme['text_soft']};
    font-size: 12px;
    letter-spacing: 0.2px;
}}

.card {{
    background: {theme['bg_card']};
    border: 1px solid {theme['border']};
    border-radius: 14px;
    padding: 14px 16px;
    margin-bottom: 12px;
}}

.stMetric {{
    background: {theme['bg_card']};
    padding: 10px 12px;
    border-radius: 12px;
    border: 1px solid {theme['border']};
}}

.pill {{
    display: inline-block;
    padding: 1px 8px;
    border-radius: 999px;
    font-size: 11px;
    border: 1px solid {theme['border']};
    margin-right: 4px;
}}

.warning-row {{
    color: {theme['warning']};
    font-size: 13px;
}}
</style>
""",
        unsafe_allow_html=True,
    )
    return {"name": active_name, "theme": theme}
