"""I-V Curve Report Generator - Streamlit Dashboard.

Plant data entry, curve tracer file upload, I-V / P-V analysis of each
uploaded curve and a preview of the report inputs.
"""

import streamlit as st
import pandas as pd

from iv_report.analysis import iv_series, pv_series
from iv_report.config import APP_CONFIG, UPLOAD_CONFIG, configure_logging
from iv_report.exceptions import IncompleteReportError
from iv_report.reporting import ModuleNameplate, PlantData, ReportDraft
from iv_report.session import Session

configure_logging()

# Page configuration
st.set_page_config(
    page_title=APP_CONFIG["app_name"],
    page_icon="☀️",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Initialize session state
if 'batch_failures' not in st.session_state:
    st.session_state.batch_failures = []


def build_session(uploaded_files) -> Session:
    """Rebuild the curve session from the current set of uploads."""
    session = Session()
    result = session.add_batch([(f.name, f.getvalue()) for f in uploaded_files])
    st.session_state.batch_failures = result.failures
    return session


st.title(f"☀️ {APP_CONFIG['app_name']}")
st.caption("Automated analysis of I-V curves of photovoltaic modules")

# Sidebar
with st.sidebar:
    st.markdown("### 🏭 Plant Data")
    plant = PlantData(
        name=st.text_input("Plant Name", placeholder="e.g. Brasília Solar Plant"),
        inverter_count=int(st.number_input("Inverters", min_value=0, step=1)),
        modules_per_string=int(st.number_input("Modules per String", min_value=0, step=1)),
        nominal_power=float(st.number_input("Nominal Power (Wp)", min_value=0.0, step=5.0)),
    )

    st.markdown("---")
    st.markdown("#### Module Datasheet")
    nameplate = ModuleNameplate.from_mapping({
        'manufacturer': st.text_input("Manufacturer"),
        'model': st.text_input("Model"),
        'pmax': st.text_input("Pmax (W)"),
        'voc': st.text_input("Voc (V)"),
        'isc': st.text_input("Isc (A)"),
    })

    st.markdown("---")
    st.info(f"📦 Version {APP_CONFIG['version']}")

tab_upload, tab_analysis, tab_report = st.tabs(["📂 Upload", "📊 Analysis", "📝 Report"])

with tab_upload:
    st.header("📂 Upload Files")
    datasheet = st.file_uploader("Datasheet (PDF)", type=['pdf'])
    extensions = UPLOAD_CONFIG["text_extensions"] + UPLOAD_CONFIG["spreadsheet_extensions"]
    uploaded_files = st.file_uploader(
        "I-V Curve Files",
        type=[ext.lstrip('.') for ext in extensions],
        accept_multiple_files=True,
        help="Columns: voltage, current, voltage STC, current STC[, irradiance[, temperature]]",
    )

    session = build_session(uploaded_files or [])

    for failure in st.session_state.batch_failures:
        st.error(f"❌ {failure.name}: {failure.message}")
    if len(session):
        st.success(f"✅ {len(session)} curve file(s) analyzed")

with tab_analysis:
    st.header("📊 I-V Curve Analysis")

    if len(session) == 0:
        st.info("📂 Upload I-V curve files to see the analysis")
    else:
        key = st.radio("Curve", session.keys(), horizontal=True)
        curve = session.select(key)

        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("Irradiance", f"{curve.irradiance:.0f} W/m²")
        with col2:
            st.metric("Temperature", f"{curve.temperature:.1f} °C")
        with col3:
            st.metric("Pmax (Measured)", f"{curve.measured_max_power:.1f} W")
        with col4:
            st.metric("Pmax (STC)", f"{curve.corrected_max_power:.1f} W")

        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("Voc", f"{curve.open_circuit_voltage:.2f} V")
        with col2:
            st.metric("Isc", f"{curve.short_circuit_current:.3f} A")
        with col3:
            st.metric("Vmpp / Impp", f"{curve.v_at_max_power:.2f} V / {curve.i_at_max_power:.3f} A")
        with col4:
            st.metric("Fill Factor", f"{curve.fill_factor:.4f}")

        if curve.is_empty:
            st.warning("⚠️ No valid rows found in this file; please check its contents.")
        else:
            col_plot1, col_plot2 = st.columns(2)

            with col_plot1:
                st.subheader("I-V Characteristic")
                iv_df = iv_series(curve)
                st.line_chart(pd.DataFrame({
                    'Measured (A)': iv_df['current'].to_numpy(),
                    'STC (A)': iv_df['current_stc'].to_numpy(),
                }, index=iv_df['voltage'].rename('Voltage (V)')))

            with col_plot2:
                st.subheader("P-V Characteristic")
                pv_df = pv_series(curve)
                st.line_chart(pd.DataFrame({
                    'Measured (W)': pv_df['power'].to_numpy(),
                    'STC (W)': pv_df['power_stc'].to_numpy(),
                }, index=pv_df['voltage'].rename('Voltage (V)')))

        st.subheader("All Curves")
        st.dataframe(session.summary_frame(), use_container_width=True)

with tab_report:
    st.header("📝 Report Preview")
    try:
        draft = ReportDraft.build(
            plant,
            session,
            nameplate=nameplate,
            datasheet_name=datasheet.name if datasheet else None,
        )
    except IncompleteReportError as e:
        st.warning("Fill in all plant fields and upload the required files: " + ", ".join(e.missing))
    else:
        st.subheader(draft.title)
        st.markdown(f"**{draft.plant.name}** · {draft.report_date.isoformat()}")
        st.dataframe(draft.results_frame(), use_container_width=True)
        st.markdown("#### Sections")
        for number, section in enumerate(draft.sections, start=1):
            st.markdown(f"{number}. {section}")
        st.json(draft.to_dict(), expanded=False)
