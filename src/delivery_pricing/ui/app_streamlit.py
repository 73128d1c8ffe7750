"""
Streamlit UI for the Delivery Pricing Engine.

Features:
- Order inputs in the sidebar
- Fee metric with the resolution trace
- Fee schedule table with CSV export
"""
import streamlit as st
import pandas as pd
import sys
from pathlib import Path
from datetime import datetime

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from delivery_pricing.engine import DeliveryOrder, DeliveryPricingEngine, DeliveryPricingError


st.set_page_config(
    page_title="Delivery Pricing",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_engine():
    """Get cached engine instance."""
    return DeliveryPricingEngine()


try:
    engine = get_engine()
except Exception as e:
    st.error(f"System Error: {e}")
    st.stop()


def schedule_frame(rows: list[dict]) -> pd.DataFrame:
    """Fee schedule as a display table."""
    df = pd.DataFrame(rows)
    df['Distance'] = [
        f"{r['from_km']:g} – {r['to_km']:g} km" + (" (incl.)" if r['upper_inclusive'] else "")
        for r in rows
    ]
    return df.rename(columns={
        'tier': 'Tier',
        'base_fee': 'Base Fee ($)',
        'rush_hour_fee': 'Rush Hour Fee ($)',
    })[['Tier', 'Distance', 'Base Fee ($)', 'Rush Hour Fee ($)']]


# ============================================================================
# SIDEBAR: Order Inputs
# ============================================================================
with st.sidebar:
    st.header("🛒 Order")

    with st.container(border=True):
        cart_subtotal = st.number_input("Cart Subtotal ($)", min_value=0.0, value=30.0, step=0.01, format="%.2f")
        distance_km = st.number_input(
            "Distance (km)",
            min_value=0.0,
            max_value=float(engine.settings.max_distance_km),
            value=6.0,
            step=0.5,
        )
        is_rush_hour = st.toggle("Rush Hour", value=False)


# ============================================================================
# MAIN CONTENT
# ============================================================================
st.title("Delivery Pricing")
st.caption(f"Pricing Engine Active | {datetime.now().strftime('%Y-%m-%d')}")

tab1, tab2 = st.tabs(["⚡ Fee", "📚 Schedule"])

with tab1:
    try:
        order = DeliveryOrder(
            cart_subtotal=f"{cart_subtotal:.2f}",
            distance_km=distance_km,
            is_rush_hour=is_rush_hour,
        )
        result = engine.calculate(order)
    except DeliveryPricingError as e:
        st.error(e.message)
    else:
        m1, m2, m3 = st.columns(3)
        m1.metric("Delivery Fee", f"${result.fee:.2f}")
        m2.metric("Base Fee", f"${result.base_fee:.2f}")
        m3.metric("Tier", result.distance_tier)

        if result.free_delivery_applied:
            st.markdown(f":green[**Free delivery applied (saved ${result.adjusted_fee:.2f})**]")

        with st.expander("🔍 Resolution Details", expanded=True):
            for t in result.trace:
                if t.value:
                    st.caption(f"**{t.step}**: {t.description} = `{t.value}`")
                else:
                    st.caption(f"**{t.step}**: {t.description}")

with tab2:
    settings = engine.settings
    schedule_df = schedule_frame(engine.fee_schedule())
    st.dataframe(schedule_df, hide_index=True, use_container_width=True)

    rule = "or more" if settings.free_delivery_inclusive else "strictly above"
    st.caption(
        f"Rush hour multiplier × {settings.rush_hour_multiplier}. "
        f"Free delivery for carts {rule} ${settings.free_delivery_threshold:.2f}."
    )

    st.download_button(
        "📥 CSV",
        data=schedule_df.to_csv(index=False),
        file_name="delivery_fee_schedule.csv",
        mime="text/csv",
    )
