"""
Memory Management Simulator — Partition Allocation & Page Replacement

Interactive front end for the two simulation engines:
    - Contiguous allocation with First / Best / Worst / Next Fit placement
    - Demand paging with FIFO, LRU, Optimal and Clock replacement

Built with Streamlit for the web interface and Plotly for visualizations.
All simulation state lives in the controllers kept in ``st.session_state``;
this module only reads it back and draws it.
"""

# =============================================================================
# IMPORTS
# =============================================================================

import streamlit as st                       # Web application framework
import plotly.graph_objects as go            # Interactive plotting library

from config import (
    DEFAULT_FRAMES,
    DEFAULT_PARTITIONS,
    DEFAULT_PROCESS_SIZE_KB,
    DEFAULT_REFERENCE_STRING,
    DEFAULT_TOTAL_MEMORY_KB,
    LOG_DISPLAY_LIMIT,
    MAX_FRAMES,
    MIN_FRAMES,
)
from controller import AllocatorController, PagingController
from placement import PlacementAlgorithm
from replacement import ReplacementAlgorithm
from utils import cell_color, get_color, parse_partition_sizes, parse_reference_string


# Configure the Streamlit page
st.set_page_config(page_title="Memory Management Simulator", layout="wide")

# -----------------------------------------------------------------------------
# SESSION STATE - one controller per simulation, kept across reruns
# -----------------------------------------------------------------------------

if "allocator_ctl" not in st.session_state:
    st.session_state.allocator_ctl = AllocatorController()
if "paging_ctl" not in st.session_state:
    st.session_state.paging_ctl = PagingController()

allocator_ctl: AllocatorController = st.session_state.allocator_ctl
paging_ctl: PagingController = st.session_state.paging_ctl

LOG_ICONS = {"system": "⚙️", "alloc": "✅", "dealloc": "♻️", "fail": "❌"}


def render_log(entries):
    """Show the most recent log entries, newest first."""
    for entry in entries[-LOG_DISPLAY_LIMIT:][::-1]:
        st.write(f"{LOG_ICONS.get(entry.kind, '')} {entry}")


# -----------------------------------------------------------------------------
# SIDEBAR NAVIGATION
# -----------------------------------------------------------------------------

view = st.sidebar.radio("Choose View", ["Partition Allocation", "Page Replacement"])

st.title("Memory Management Simulator")


# =============================================================================
# PARTITION ALLOCATION VIEW
# =============================================================================

def allocation_view():
    # ----- Sidebar: region configuration -----
    st.sidebar.header("Memory Configuration")
    mode = st.sidebar.radio(
        "Initialization mode",
        ["Total size", "Custom partitions"],
        disabled=allocator_ctl.is_active,
    )
    total_kb = st.sidebar.number_input(
        "Total memory (KB)",
        min_value=1,
        value=DEFAULT_TOTAL_MEMORY_KB,
        step=10,
        disabled=allocator_ctl.is_active or mode != "Total size",
    )
    partitions_text = st.sidebar.text_input(
        "Partition sizes (KB, comma separated)",
        value=DEFAULT_PARTITIONS,
        disabled=allocator_ctl.is_active or mode != "Custom partitions",
    )

    if st.sidebar.button("Initialize", disabled=allocator_ctl.is_active):
        try:
            if mode == "Custom partitions":
                allocator_ctl.initialize(partition_sizes=parse_partition_sizes(partitions_text))
            else:
                allocator_ctl.initialize(total_size=int(total_kb))
        except ValueError as e:
            st.sidebar.error(str(e))

    if st.sidebar.button("Reset", disabled=not allocator_ctl.is_active):
        allocator_ctl.reset()

    st.sidebar.markdown("---")
    st.sidebar.header("Placement Algorithm")
    algorithm = st.sidebar.radio(
        "Algorithm",
        list(PlacementAlgorithm),
        format_func=lambda a: a.label,
    )

    if not allocator_ctl.is_active:
        st.info("Please initialize memory to begin simulation.")
        render_log(allocator_ctl.log)
        return

    col1, col2 = st.columns([1, 2])

    # ----- Left column: process controls and log -----
    with col1:
        st.subheader("Process")
        owner_id = st.text_input("Process ID", value="")
        size = st.number_input("Process size (KB)", min_value=1, value=DEFAULT_PROCESS_SIZE_KB)

        c_alloc, c_dealloc = st.columns(2)
        if c_alloc.button("Allocate"):
            result = allocator_ctl.allocate(owner_id, int(size), algorithm)
            if not result.success:
                st.error(result.message)
        if c_dealloc.button("Deallocate"):
            result = allocator_ctl.deallocate(owner_id)
            if not result.success:
                st.error(result.message)

        st.subheader("Event Log")
        render_log(allocator_ctl.log)

    allocator = allocator_ctl.allocator
    stats = allocator.get_stats()
    blocks = allocator.get_state()

    # ----- Right column: memory map, stats, chart, block table -----
    with col2:
        st.subheader("Memory Map")
        fig = go.Figure()
        for block in blocks:
            label = block.owner_id if block.allocated else f"{block.size}"
            hover = (
                f"Block ID: {block.block_id}<br>"
                f"Status: {'Allocated' if block.allocated else 'Free'}<br>"
                f"Size: {block.size} KB"
                + (f"<br>Process: {block.owner_id}" if block.allocated else "")
            )
            fig.add_trace(go.Bar(
                x=[block.size],
                y=["Memory"],
                orientation="h",
                marker_color=get_color(block),
                text=label,
                textposition="inside",
                hovertext=hover,
                hoverinfo="text",
            ))
        fig.update_layout(
            barmode="stack",
            height=140,
            showlegend=False,
            margin=dict(l=10, r=10, t=10, b=10),
            xaxis=dict(range=[0, allocator.total_size], title="KB"),
            yaxis=dict(showticklabels=False),
        )
        st.plotly_chart(fig, use_container_width=True)

        st.subheader("Statistics")
        m1, m2, m3 = st.columns(3)
        m1.metric("Total", f"{stats['total']} KB")
        m2.metric("Used", f"{stats['used']} KB")
        m3.metric("Free", f"{stats['free']} KB")
        m4, m5, m6 = st.columns(3)
        m4.metric("Utilization", f"{stats['utilization_pct']}%")
        m5.metric("External Fragmentation", f"{stats['external_fragmentation']} KB")
        m6.metric("Success Rate", f"{stats['success_rate_pct']}%")

        # ----- Utilization over time -----
        points = list(allocator_ctl.utilization_history)
        fig2 = go.Figure()
        fig2.add_trace(go.Scatter(
            x=[label for label, _ in points],
            y=[value for _, value in points],
            mode="lines+markers",
            line=dict(color="#F9A66C", width=3, shape="spline"),
            fill="tozeroy",
            fillcolor="rgba(249, 166, 108, 0.2)",
        ))
        fig2.update_layout(
            height=260,
            title="Memory Utilization (%)",
            yaxis=dict(range=[0, 100], ticksuffix="%"),
            showlegend=False,
        )
        st.plotly_chart(fig2, use_container_width=True)

        st.subheader("Blocks")
        st.table([
            {
                "block_id": b.block_id,
                "size_kb": b.size,
                "status": "Allocated" if b.allocated else "Free",
                "process": b.owner_id or "-",
            }
            for b in blocks
        ])


# =============================================================================
# PAGE REPLACEMENT VIEW
# =============================================================================

def paging_view():
    st.sidebar.header("Paging Settings")
    num_frames = st.sidebar.number_input(
        "Number of frames", min_value=MIN_FRAMES, max_value=MAX_FRAMES, value=DEFAULT_FRAMES
    )
    ref_text = st.sidebar.text_area("Reference string", value=DEFAULT_REFERENCE_STRING)
    algorithm = st.sidebar.radio(
        "Replacement Policy",
        list(ReplacementAlgorithm),
        format_func=lambda a: a.value.upper(),
    )

    # Algorithm changed → rebuild, re-running if there was a run in progress
    if paging_ctl.is_active and paging_ctl.simulator.algorithm is not algorithm:
        paging_ctl.switch_algorithm(algorithm)

    def configure():
        try:
            paging_ctl.initialize(int(num_frames), parse_reference_string(ref_text), algorithm)
            return True
        except ValueError as e:
            st.error(str(e))
            return False

    c_step, c_run, c_reset = st.columns(3)
    if c_step.button("Step"):
        if paging_ctl.is_active or configure():
            if paging_ctl.step() is None:
                st.warning("All references have been processed. Click Reset to start over.")
    if c_run.button("Run All"):
        if configure():
            paging_ctl.run_all()
    if c_reset.button("Reset"):
        paging_ctl.reset()

    sim = paging_ctl.simulator
    if sim is None or not sim.history:
        st.info("Configure frames and reference string, then click Step or Run All.")
        render_log(paging_ctl.log)
        return

    # ----- Frame grid (textbook layout) -----
    st.subheader("Frame Table")
    rows = paging_ctl.grid()
    header = ["Reference"] + [str(s.ref) for s in sim.history]
    columns = [[label for label, _ in rows]]
    colors = [["#e8eef0"] * len(rows)]
    for col in range(len(sim.history)):
        values, fills = [], []
        for label, cells in rows:
            if label == "Status":
                values.append(cells[col])
                fills.append(cell_color("hit" if cells[col] == "HIT" else "fault"))
            else:
                value, kind = cells[col]
                values.append(str(value))
                fills.append(cell_color(kind))
        columns.append(values)
        colors.append(fills)

    fig = go.Figure(go.Table(
        header=dict(values=header, fill_color="#4a6163", font=dict(color="white")),
        cells=dict(values=columns, fill_color=colors, align="center"),
    ))
    fig.update_layout(height=80 + 30 * len(rows), margin=dict(l=0, r=0, t=0, b=0))
    st.plotly_chart(fig, use_container_width=True)

    col1, col2 = st.columns([1, 2])
    with col1:
        st.subheader("Event Log")
        render_log(paging_ctl.log)

    with col2:
        st.subheader("Statistics")
        stats = sim.get_stats()
        m1, m2, m3 = st.columns(3)
        m1.metric("References", stats["total_refs"])
        m2.metric("Hit Ratio", f"{stats['hit_ratio_pct']}%")
        m3.metric("Fault Ratio", f"{stats['fault_ratio_pct']}%")

        fig2 = go.Figure()
        fig2.add_trace(go.Bar(
            x=["Hits", "Faults"],
            y=[stats["hits"], stats["faults"]],
            marker_color=[cell_color("hit"), cell_color("fault")],
        ))
        fig2.update_layout(height=300, title="Hits vs Faults")
        st.plotly_chart(fig2, use_container_width=True)


if view == "Partition Allocation":
    allocation_view()
else:
    paging_view()
