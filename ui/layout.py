import streamlit as st


def setup_page(*, table_hover: str = "#eff6ff", accent: str = "#2563eb"):
    st.set_page_config(
        page_title="AI TaskForce",
        page_icon="🤖",
        layout="wide",
    )

    st.markdown(
        f"""
        <style>
        :root {{
            --color-accent: {accent};
            --table-hover: {table_hover};
            --padding: 1rem;
        }}

        /* --- Badges (member status, task status, skills) --- */
        .badge {{
            display: inline-block; padding: 2px 8px; border-radius: 6px;
            font-size: 12px; font-weight: 600; border: 1px solid transparent;
        }}
        .badge.active   {{ background:#dcfce7; color:#15803d; }}
        .badge.inactive {{ background:#fee2e2; color:#b91c1c; }}
        .badge.done     {{ background:#dcfce7; color:#15803d; border-color:#bbf7d0; }}
        .badge.progress {{ background:#dbeafe; color:#1d4ed8; border-color:#bfdbfe; }}
        .badge.todo     {{ background:#f1f5f9; color:#334155; border-color:#e2e8f0; }}
        .badge.skill    {{ background:#f1f5f9; color:#475569; border-color:#e2e8f0; font-weight:400; }}

        /* --- Buttons --- */
        div.stButton > button[kind="primary"] {{
            background-color: var(--color-accent) !important;
            font-weight: 700 !important;
        }}

        /* --- Responsive tabs --- */
        .stTabs [role="tablist"] {{
            flex-wrap: wrap;
            gap: 0.25rem;
        }}
        @media (max-width: 600px) {{
            :root {{ --padding: 0.5rem; }}
            .stTabs [role="tablist"] {{
                overflow-x: auto;
                flex-wrap: nowrap;
            }}
        }}

        .block-container {{
            padding-left: var(--padding);
            padding-right: var(--padding);
        }}

        /* DataFrame root must scroll for wide status tables */
        div[data-testid="stDataFrame"] {{
          position: relative;
          overflow: auto !important;
        }}
        div[data-testid="stDataFrame"] tbody tr:hover {{
          background-color: var(--table-hover);
        }}
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_header():
    """Render the brand header."""
    st.markdown("## 🤖 AI TaskForce")
    st.caption("Team roster, task backlog and AI assignment results.")
    st.divider()


def badge(text: str, kind: str) -> str:
    return f'<span class="badge {kind}">{text}</span>'
