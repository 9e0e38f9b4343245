# rw_app.py
# Streamlit form for the simplified retaining wall stability check.
# Run with:  streamlit run rw_app.py

import datetime

import pandas as pd
import streamlit as st

from rw_display import (
    OK_LABEL,
    round_df_3,
    draw_wall_schematic,
    format_result,
    outputs_table,
    verdicts_table,
)
from rw_engine import MIN_OVERTURNING_FS, MIN_SLIDING_FS, check_ranges, evaluate
from rw_form import ConcreteType, WallDraft, WallShape
from rw_logging import configure_logging, get_logger

logger = get_logger(__name__)

PAGE_CSS = """
<style>
/* Hide per-element toolbar icons (download/search/fullscreen) */
div[data-testid="stElementToolbar"] {display: none !important;}
div.modebar {display: none !important;}

/* ===== Custom tables: centered + colored header + zebra + mobile horizontal scroll ===== */
.rw-table-wrap{
  width:100%;
  overflow-x:auto;
  overflow-y:auto;
  border:1px solid rgba(49,51,63,0.20);
  border-radius:10px;
}
.rw-table-inner{
  min-width:max-content;
  padding:6px 8px;
}
table.rw-table{
  border-collapse:collapse;
  width:100%;
  font-size:14px;
}
table.rw-table thead th{
  background:#2f6fa5;
  color:#ffffff;
  text-align:center !important;
  padding:8px 10px;
  white-space:nowrap;
  font-weight:600;
}
table.rw-table tbody td{
  text-align:center !important;
  padding:6px 10px;
  border:1px solid rgba(49,51,63,0.12);
  white-space:nowrap;
}
table.rw-table tbody tr:nth-child(even){background:#f3f6f9;}

.rw-title-box {
    background-color: #2f6fa5;
    padding: 14px 20px;
    border-radius: 12px;
    margin-bottom: 18px;
}
.rw-title-box h1 {
    color: white;
    margin: 0;
    font-weight: 600;
    text-align: center;
    font-size: 32px;
}
.rw-ok {color:#16a34a; font-weight:700;}
.rw-fail {color:#dc2626; font-weight:700;}

@media (max-width: 768px) {
    .rw-title-box h1 {font-size: 24px;}
}
#MainMenu {visibility: hidden;}
footer {visibility: hidden;}
</style>
"""


def st_scrollable_table(df: pd.DataFrame, *, height_px: int = 320):
    """Render a horizontally-scrollable table without Streamlit dataframe toolbars."""
    if df is None:
        st.info("No table to display.")
        return

    html = round_df_3(df).to_html(
        index=False,
        escape=False,
        float_format=lambda x: f"{x:.3f}",
        classes="rw-table",
        border=0,
    )
    st.markdown(
        f'''
        <div class="rw-table-wrap" style="max-height:{height_px}px;">
          <div class="rw-table-inner">
            {html}
          </div>
        </div>
        ''',
        unsafe_allow_html=True
    )


def _badge_html(label):
    css = "rw-ok" if label == OK_LABEL else "rw-fail"
    return f'<span class="{css}">{label}</span>'


def _get_draft() -> WallDraft:
    if "draft" not in st.session_state:
        st.session_state.draft = WallDraft()
    return st.session_state.draft


def _num(draft, key, label, step, fmt=None):
    """number_input bound to one draft field through its setter."""
    kwargs = {"format": fmt} if fmt else {}
    v = st.number_input(label, value=float(getattr(draft, key)), step=step, key=f"in_{key}", **kwargs)
    draft.update(key, v)


def header_section(draft):
    c1, c2, c3, c4, c5 = st.columns([2, 1, 1, 2, 2])
    with c1:
        draft.update("nome", st.text_input("Nome", value=draft.nome, key="in_nome"))
    with c2:
        _num(draft, "altura", "Altura (m)", 0.1)
    with c3:
        _num(draft, "elevacao", "Elevação (cm)", 1.0, "%.0f")
    with c4:
        types = list(ConcreteType)
        v = st.selectbox("Tipo", types, index=types.index(draft.tipo_concreto),
                         format_func=lambda t: t.label, key="in_tipo_concreto")
        draft.update("tipo_concreto", v)
    with c5:
        shapes = list(WallShape)
        v = st.selectbox("Formato", shapes, index=shapes.index(draft.formato),
                         format_func=lambda s: s.label, key="in_formato")
        draft.update("formato", v)


def input_tabs(draft):
    tab_soil, tab_geom, tab_cap = st.tabs(["Empuxo / Solo", "Geometria", "Capacidade"])

    with tab_soil:
        c1, c2, c3, c4 = st.columns(4)
        with c1:
            _num(draft, "gamma_solo", "γ solo (kN/m³)", 0.1)
        with c2:
            _num(draft, "ang_atrito", "φ (°)", 1.0)
        with c3:
            _num(draft, "coesao", "Coesão c (kN/m²)", 1.0)
        with c4:
            _num(draft, "sobrecarga", "Sobrecarga q (kN/m²)", 0.1)

    with tab_geom:
        st.markdown("**Parede**")
        c1, c2, c3, c4 = st.columns(4)
        with c1:
            _num(draft, "largura_topo", "Largura topo (m)", 0.01)
        with c2:
            _num(draft, "incl_int", "Incl. interna (°)", 1.0)
        with c3:
            _num(draft, "incl_ext", "Incl. externa (°)", 1.0)
        with c4:
            _num(draft, "largura_base_parede", "Largura base pared. (m)", 0.01)

        st.markdown("**Base**")
        c1, c2, c3, c4 = st.columns(4)
        with c1:
            _num(draft, "base_interna", "Base interna (m)", 0.05)
        with c2:
            _num(draft, "base_externa", "Base externa (m)", 0.05)
        with c3:
            _num(draft, "altura_maior", "Altura maior (m)", 0.01)
        with c4:
            _num(draft, "altura_menor", "Altura menor (m)", 0.01)

        st.markdown("**Dente**")
        c1, c2, _, _ = st.columns(4)
        with c1:
            _num(draft, "dente_base", "Base (m)", 0.01)
        with c2:
            _num(draft, "dente_altura", "Altura (m)", 0.01)

    with tab_cap:
        c1, c2, c3 = st.columns(3)
        with c1:
            _num(draft, "gamma_concreto", "γ concreto (kN/m³)", 0.1)
        with c2:
            _num(draft, "mu", "µ (atrito base)", 0.05)
        with c3:
            _num(draft, "sigma_adm", "σ adm (kN/m²)", 5.0)


def run_check(draft):
    """Snapshot the draft, evaluate it and keep the pair for rendering."""
    wall = draft.to_input()
    res = evaluate(wall)
    logger.info(
        "wall %s: FS_desl=%.3f FS_tomb=%.3f sigma_max=%.1f e=%.3f",
        draft.nome, res.sliding_factor, res.overturning_factor,
        res.max_bearing_pressure, res.eccentricity,
    )
    bad = res.non_finite_fields()
    if bad:
        logger.warning("wall %s: non-finite results in %s", draft.nome, ", ".join(bad))
    st.session_state.result = (wall, res, check_ranges(wall))
    return wall, res


def results_section(wall, res, warnings):
    for msg in warnings:
        st.warning(msg)
    bad = res.non_finite_fields()
    if bad:
        st.error("Non-finite results (check base width and loads): " + ", ".join(bad))

    txt = format_result(res)
    r1, r2, r3 = st.columns(3)
    with r1:
        st.subheader("Empuxo")
        st.markdown(f"Ka = {txt['ka']}  \nPₐ = {txt['active_thrust']} kN/m")
    with r2:
        st.subheader("Pesos")
        st.markdown(f"W = {txt['self_weight']} kN/m  \ne = {txt['eccentricity']} m")
    with r3:
        st.subheader("σ_max")
        st.markdown(f"{txt['max_bearing_pressure']} kN/m² → {_badge_html(txt['bearing'])}", unsafe_allow_html=True)

    c1, c2 = st.columns(2)
    c1.markdown(
        f"Deslizamento F.S. = {txt['sliding_factor']} (mín. {MIN_SLIDING_FS}) {_badge_html(txt['sliding'])}",
        unsafe_allow_html=True,
    )
    c2.markdown(
        f"Tombamento F.S. = {txt['overturning_factor']} (mín. {MIN_OVERTURNING_FS}) {_badge_html(txt['overturning'])}",
        unsafe_allow_html=True,
    )

    st.divider()
    left, right = st.columns([1.25, 1.0])
    with left:
        st.subheader("Wall Schematic")
        fig = draw_wall_schematic(wall, res)
        st.pyplot(fig, width="stretch")
    with right:
        st.subheader("Stability Checks")
        st_scrollable_table(verdicts_table(res), height_px=180)

    table = outputs_table(res)
    with st.expander("Outputs"):
        st_scrollable_table(table, height_px=360)
        st.download_button(
            "Download CSV",
            table.to_csv(index=False).encode("utf-8"),
            file_name="retaining_wall_results.csv",
            mime="text/csv",
        )


def main():
    configure_logging()
    st.set_page_config(page_title="Retaining Wall Stability Check", layout="wide")
    st.markdown(PAGE_CSS, unsafe_allow_html=True)
    st.markdown('<div class="rw-title-box"><h1>Retaining Wall Stability Check</h1></div>',
                unsafe_allow_html=True)

    draft = _get_draft()
    header_section(draft)
    input_tabs(draft)

    _, mid, _ = st.columns([2, 1, 2])
    if mid.button("Calcular", width="stretch"):
        run_check(draft)

    if "result" in st.session_state:
        wall, res, warnings = st.session_state.result
        st.divider()
        results_section(wall, res, warnings)

    st.caption(
        f"© {datetime.date.today().year} – Exemplo didático (ajuste coeficientes / fórmulas "
        "conforme norma). Alguns parâmetros (elevação, tipo, formato, inclinações, dente) "
        "ainda não influem no cálculo."
    )


if __name__ == "__main__":
    main()
