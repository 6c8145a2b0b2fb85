import logging

import streamlit as st

from final_grade.config import LAYOUT, PAGE_ICON, PAGE_TITLE, configure_logging
from final_grade.io_csv import read_csv_upload, solve_frame, validate_scenarios_csv
from final_grade.solver import PROMPT, has_inputs, headline_percentage, is_warning, solve

configure_logging()
logger = logging.getLogger(__name__)

# ------------------------
# Streamlit UI
# ------------------------

st.set_page_config(
    page_title=PAGE_TITLE,
    page_icon=PAGE_ICON,
    layout=LAYOUT,
)

FIELDS = ("current", "desired", "weight")

for key in FIELDS:
    if key not in st.session_state:
        st.session_state[key] = ""


def clear_all():
    for key in FIELDS:
        st.session_state[key] = ""


st.title("📝 Final Grade Calculator")
st.write("Find the minimum score you need on the final to reach your desired grade.")

# ------------------------
# Input fields
# ------------------------

col_current, col_desired, col_weight = st.columns(3)
with col_current:
    st.text_input(
        "Current Grade (%)",
        key="current",
        placeholder="e.g., 86.5",
        help="0 to 100",
    )
with col_desired:
    st.text_input(
        "Desired Course Grade (%)",
        key="desired",
        placeholder="e.g., 90",
        help="0 to 100",
    )
with col_weight:
    st.text_input(
        "Final Exam Weight (%)",
        key="weight",
        placeholder="e.g., 30",
        help="Greater than 0 and up to 100",
    )

current = st.session_state["current"]
desired = st.session_state["desired"]
weight = st.session_state["weight"]

btn1, btn2, _ = st.columns([1, 1, 4])
with btn1:
    # no-op: every rerun recomputes the result below
    st.button("Calculate", type="primary", key="calculate")
with btn2:
    st.button(
        "Clear",
        key="clear",
        on_click=clear_all,
        disabled=not has_inputs(current, desired, weight),
    )

# ------------------------
# Result
# ------------------------

result = solve(current, desired, weight)

if not result.ready:
    st.info(PROMPT)
elif result.errors:
    st.error("\n".join(f"- {e}" for e in result.errors))
else:
    headline = headline_percentage(result)
    if is_warning(result):
        st.warning(f"## {headline}")
    else:
        st.success(f"## {headline}")
    st.write(result.interpretation.message)

    st.subheader("How it's calculated")
    st.markdown("\n".join(f"{i}. {s}" for i, s in enumerate(result.steps, start=1)))

# ------------------------
# Several courses at once (optional CSV upload)
# ------------------------

st.markdown("---")
with st.expander("Several courses at once (CSV upload)"):
    st.write("Upload a CSV with **Current**, **Desired** and **Weight** columns, one course per row.")
    scenarios_csv = st.file_uploader("Courses CSV", type=["csv"], key="scenarios_csv")

    if scenarios_csv is not None:
        try:
            scenarios = validate_scenarios_csv(read_csv_upload(scenarios_csv))
        except Exception as e:
            logger.warning("Rejected CSV upload: %s", e)
            st.error(f"CSV error: {e}")
        else:
            st.dataframe(
                solve_frame(scenarios),
                column_config={
                    "Required": st.column_config.NumberColumn("Required (%)", format="%.2f"),
                },
            )

st.caption("Made with ❤️ for students")
