import logging

import streamlit as st

from ecgsim.config import SimConfig
from ecgsim.engine import ECGEngine
from ecgsim.loader import LoaderPhase
from ecgsim.rng import os_entropy, seeded_entropy
from ecgsim.export import record_waveform, bundle_records_to_zip

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

IDLE_TICKS_PER_RERUN = 2

st.set_page_config(page_title="ECG Record Viewer", layout="wide")
st.title("Synthetic ECG Record Viewer")

st.markdown(
    """Browse synthetic single-lead ECG records. The first records are generated
immediately; the rest are filled in the background while you navigate.
"""
)

with st.sidebar:
    st.header("Dataset")
    total = st.number_input("Total records", 1, 5000, 100)
    duration = st.number_input("Record duration (s)", 1, 60, 5)
    sample_rate = st.selectbox("Sample rate (Hz)", [125, 250, 500], index=1)
    use_seed = st.checkbox("Reproducible (seeded, non-cryptographic)", value=False)
    seed = st.number_input("Seed", 0, 10_000_000, 42, disabled=not use_seed)
    rebuild = st.button("Regenerate", type="primary")

cfg = SimConfig(
    total_records=int(total),
    record_duration_s=int(duration),
    sample_rate_hz=int(sample_rate),
)

if rebuild or "engine" not in st.session_state or st.session_state["engine"].cfg != cfg:
    entropy = seeded_entropy(int(seed)) if use_seed else os_entropy
    engine = ECGEngine(cfg, entropy=entropy)
    engine.start()
    st.session_state["engine"] = engine

engine: ECGEngine = st.session_state["engine"]

# Streamlit reruns are our frames: finish the burst, then a little idle work per rerun
while engine.loader.phase == LoaderPhase.INITIAL_BURST and engine.scheduler.run_next():
    pass
engine.scheduler.run_pending(max_ticks=IDLE_TICKS_PER_RERUN)

generated, target = engine.progress
st.progress(generated / max(target, 1), text=f"Generated {generated} / {target} records")

c1, c2, c3 = st.columns([1, 1, 4])
with c1:
    if st.button("◀ Previous"):
        engine.previous_record()
with c2:
    if st.button("Next ▶"):
        engine.next_record()
with c3:
    if generated < target and st.button("Load all now"):
        engine.scheduler.run_pending()
        generated, target = engine.progress

if len(engine.store):
    record = engine.current()
    st.write(f"### Record {engine.store.cursor + 1} / {len(engine.store)}")

    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Timestamp", record.timestamp.strftime("%Y-%m-%d %H:%M:%S"))
    m2.metric("Heart rate", f"{record.heart_rate} bpm")
    m3.metric("Diagnosis", record.diagnosis_label)
    m4.metric("Quality", record.quality.value)

    st.line_chart(record_waveform(record, cfg.sample_rate_hz), x="t_s", y="amplitude", height=320)

    with st.expander("Generated records"):
        st.dataframe(engine.store.to_frame())

    zip_bytes = bundle_records_to_zip(engine.store, cfg)
    st.download_button(
        "Download generated records (ZIP)",
        data=zip_bytes,
        file_name="ecg_records.zip",
        mime="application/zip"
    )
else:
    st.info("Generating first records…")
