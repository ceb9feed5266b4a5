import streamlit as st


def setup_style():
    st.markdown("""
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Manrope:wght@400;600;700;800&display=swap');

        :root {
            --glass-bg: rgba(167, 210, 255, 0.11);
            --glass-border: rgba(234, 247, 255, 0.35);
            --glass-shadow: 0 14px 42px rgba(4, 18, 42, 0.35);
            --text-main: #f3f8ff;
            --text-soft: rgba(234, 244, 255, 0.72);
            --accent: #73c3ff;
        }

        html, body, .stApp {
            font-family: 'Manrope', sans-serif;
            color: var(--text-main);
            background:
                radial-gradient(55rem 28rem at 10% -5%, rgba(111, 198, 255, 0.30), transparent 65%),
                radial-gradient(50rem 24rem at 95% 0%, rgba(145, 125, 255, 0.20), transparent 62%),
                linear-gradient(180deg, #08101d 0%, #0a1422 48%, #0b1420 100%);
            background-attachment: fixed;
        }

        .ac-stat-card {
            background: var(--glass-bg);
            border: 1px solid var(--glass-border);
            box-shadow: var(--glass-shadow);
            border-radius: 18px;
            padding: 1rem 1.2rem;
        }
        .ac-stat-label { color: var(--text-soft); font-size: 0.85rem; }
        .ac-stat-value { font-size: 2rem; font-weight: 800; color: var(--accent); }

        [data-testid="stAlert"]{
            border-radius: 16px !important;
        }
    </style>
    """, unsafe_allow_html=True)


def render_stat_cards(items):
    """items: list of (label, value) pairs, one card per column."""
    cols = st.columns(len(items))
    for col, (label, value) in zip(cols, items):
        with col:
            st.markdown(
                f'''
                <div class="ac-stat-card">
                    <div class="ac-stat-label">{label}</div>
                    <div class="ac-stat-value">{value}</div>
                </div>
                ''',
                unsafe_allow_html=True,
            )


def render_request_message(state, key):
    """Show the message of a view request; errors stay until dismissed."""
    phase, message = state.visible()
    if not message:
        return
    if phase == "success":
        st.success(message)
    elif phase == "error":
        st.error(message)
        if st.button("Dismiss", key=f"dismiss_{key}"):
            state.acknowledge()
            st.rerun()


def render_offline_banner():
    st.error("🔌 Server is offline. Login is disabled until the backend is reachable again.")


def update_chart_layout(fig):
    fig.update_layout(
        template="plotly_dark",
        font=dict(family="Manrope, sans-serif", size=13, color="#EAF2FF"),
        margin=dict(l=20, r=20, t=50, b=20),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(185,220,255,0.06)",
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=1.02,
            xanchor="right",
            x=1
        )
    )
    return fig
