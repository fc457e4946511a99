import streamlit as st
import pandas as pd
import plotly.express as px

from components.benchmark import BenchConfig, run_benchmark, summarize, structure_stats
from components.workload import WorkLoad
from demo import run_demo
from tries.ternary_trie import TernarySearchTrie, InvalidKeyError

# Configure page
st.set_page_config(
    page_title="TSTBench",
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded"
)

if 'trie' not in st.session_state:
    st.session_state['trie'] = TernarySearchTrie()
trie = st.session_state['trie']

# Main title
st.title("🌳 Ternary Search Trie Bench")
st.markdown("---")

# Sidebar
with st.sidebar:
    st.header("Navigation")
    page = st.selectbox(
        "Choose a section:",
        ["Home", "Explorer", "Benchmark"]
    )

    st.markdown("---")
    st.subheader("Quick Actions")
    if st.button("🧹 Empty Trie"):
        trie.make_empty()
        st.rerun()
    if st.button("🎲 Load 200 Random Words"):
        wl = WorkLoad(seed=42)
        trie.batch_insert(wl.pairs(wl.words(200)))
        st.rerun()


def entries_frame(pairs):
    return pd.DataFrame(list(pairs), columns=["key", "value"])


# Main content area
if page == "Home":
    st.header("Demo Session")

    st.markdown("""
    Replays a fixed session on a fresh trie:

    **Calls:**
    - insert bag, bat, cab, bagel, beet, abc
    - print entries and size
    - value of abc, beet, a
    - contains baet, beet, abc
    - remove beet, then print again
    """)

    st.code("\n".join(run_demo()), language="text")

elif page == "Explorer":
    st.header("🔍 Explorer")

    stats = structure_stats(trie)
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric("Keys", stats["size"])

    with col2:
        st.metric("Nodes", stats["nodes"])

    with col3:
        st.metric("Height", stats["height"])

    with col4:
        st.metric("Avg Branching", f"{stats['avg_branch_factor']:.2f}")

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Insert")
        with st.form("insert_form"):
            key = st.text_input("Key")
            value = st.number_input("Value", value=0, step=1)
            if st.form_submit_button("Insert"):
                try:
                    if trie.insert(key, int(value)):
                        st.success(f"✅ Inserted {key!r}")
                    else:
                        st.warning(f"⚠️ {key!r} already has a value")
                except InvalidKeyError as e:
                    st.error(f"❌ {e}")

    with col2:
        st.subheader("Lookup / Remove")
        probe = st.text_input("Key to look up")
        if probe:
            try:
                st.write(f"**value:** {trie.value(probe)}")
                st.write(f"**contains:** {trie.contains(probe)}")
                if st.button("Remove"):
                    if trie.remove(probe):
                        st.success(f"✅ Removed {probe!r}")
                    else:
                        st.info(f"{probe!r} not present")
            except InvalidKeyError as e:
                st.error(f"❌ {e}")

    st.subheader("Entries")
    prefix = st.text_input("Prefix filter", value="")
    limit = st.slider("Max rows", min_value=10, max_value=1000, value=100)
    st.dataframe(entries_frame(trie.enumerate_prefix(prefix, k=limit)), use_container_width=True)

elif page == "Benchmark":
    st.header("📊 Benchmark")

    with st.form("bench_form"):
        num_keys = st.slider("Keys per repeat", min_value=100, max_value=20_000, value=2_000, step=100)
        prefix_freq = st.slider("Prefix frequency", min_value=0.0, max_value=0.95, value=0.0)
        repeats = st.slider("Repeats", min_value=1, max_value=20, value=5)
        balanced = st.checkbox("Balanced batch insert", value=False)
        seed = st.number_input("Seed", value=7, step=1)
        submitted = st.form_submit_button("Run")

    if submitted:
        try:
            config = BenchConfig(
                num_keys=num_keys,
                prefix_freq=prefix_freq,
                repeats=repeats,
                seed=int(seed),
                balanced=balanced,
            )
            st.session_state['bench'] = run_benchmark(config)
        except ValueError as e:
            st.error(f"❌ Invalid configuration: {str(e)}")

    if 'bench' in st.session_state:
        df = st.session_state['bench']
        summary = summarize(df)

        fig = px.bar(summary, x="op", y="median", error_y=summary["p95"] - summary["median"],
                     title="Median µs per operation (error bar to p95)")
        st.plotly_chart(fig, use_container_width=True)

        fig_box = px.box(df, x="op", y="us_per_op", points="all", title="µs per operation across repeats")
        st.plotly_chart(fig_box, use_container_width=True)

        tab1, tab2 = st.tabs(["Summary", "Raw Timings"])
        with tab1:
            st.dataframe(summary)
        with tab2:
            st.dataframe(df, use_container_width=True)
    else:
        st.info("👆 Pick a configuration and press Run")

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | Ternary Search Trie Bench
    </div>
    """,
    unsafe_allow_html=True
)
