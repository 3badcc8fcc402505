# ui/generator_page.py
from __future__ import annotations
import html
import json
from typing import List

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from core.config import config
from core.history_utils import PasswordHistory, mask
from core.password_utils import (
    GenerationConfig,
    GenerationFailure,
    GenerationResult,
    assess_strength,
    generate_many,
)

_TABLE_CSS = """
<style>
  :root { color-scheme: light dark; }
  table#pwtable { border-collapse: collapse; width: 100%; border: 1px solid #e5e7eb; }
  thead tr { background: #f8fafc; }
  td, th { padding: 6px 10px; }
  td.pw { font-family: ui-monospace,Consolas,Monaco,monospace; }
  button.cpy { background:#2563eb; border:none; color:#fff; padding:6px 10px; border-radius:6px; cursor:pointer; }
  @media (prefers-color-scheme: dark) {
    table#pwtable { border-color: #374151; }
    thead tr { background: #111827; color: #e5e7eb; }
  }
</style>
"""

# Clipboard API needs a secure context; textarea + execCommand otherwise
_COPY_JS = """
<script>
function copyText(text) {
  if (navigator.clipboard && window.isSecureContext) {
    return navigator.clipboard.writeText(text);
  }
  const ta = document.createElement("textarea");
  ta.value = text;
  ta.style.position = "fixed";
  ta.style.opacity = "0";
  document.body.appendChild(ta);
  ta.select();
  try { document.execCommand("copy"); }
  finally { document.body.removeChild(ta); }
  return Promise.resolve();
}
const secrets = %s;
document.getElementById("pwtable").addEventListener("click", (e) => {
  const btn = e.target.closest("button.cpy");
  if (!btn) return;
  copyText(secrets[Number(btn.dataset.idx)]).then(() => {
    const old = btn.textContent;
    btn.textContent = "Copied";
    setTimeout(() => btn.textContent = old, 900);
  }).catch(() => alert("Clipboard blocked by browser"));
});
</script>
"""


def _history() -> PasswordHistory:
    if "history" not in st.session_state:
        st.session_state["history"] = PasswordHistory(config.history_capacity)
    return st.session_state["history"]


def _password_table(results: List[GenerationResult], gen_cfg: GenerationConfig, show_plain: bool) -> str:
    rows = []
    for i, res in enumerate(results):
        shown = res.password if show_plain else mask(res.password)
        a = assess_strength(res.password, res.pool_size, gen_cfg)
        rows.append(
            f"<tr><td>{i + 1}</td><td class='pw'>{html.escape(shown)}</td>"
            f"<td>{a.label.value} · {a.entropy_bits} bits</td>"
            f"<td style='text-align:right;'><button class='cpy' data-idx='{i}'>Copy</button></td></tr>"
        )
    table = (
        "<table id='pwtable'><thead><tr>"
        "<th style='text-align:left;width:40px;'>#</th>"
        "<th style='text-align:left;'>Password</th>"
        "<th style='text-align:left;width:170px;'>Strength</th>"
        "<th style='width:90px;'></th>"
        "</tr></thead><tbody>" + "".join(rows) + "</tbody></table>"
    )
    # </ cannot appear inside the script body
    payload = json.dumps([r.password for r in results]).replace("</", "<\\/")
    return _TABLE_CSS + table + (_COPY_JS % payload)


def render() -> None:
    st.subheader("🔑 Password Generator")

    colL, colR = st.columns([3, 2])
    with colL:
        length = st.slider(
            "Password length", config.min_length, config.max_length, config.default_length, 1, key="length"
        )
        count = st.number_input(
            "Quantity", min_value=1, max_value=config.max_quantity,
            value=config.default_quantity, step=1, key="quantity",
        )
        show_plain = st.checkbox("Show characters (unmasked)", value=False, key="show_plain")
    with colR:
        st.markdown("**Character sets**")
        use_lower   = st.checkbox("a–z", value=True, key="use_lower")
        use_upper   = st.checkbox("A–Z", value=True, key="use_upper")
        use_digits  = st.checkbox("0–9", value=True, key="use_digits")
        use_symbols = st.checkbox("Symbols", value=True, key="use_symbols")

        st.markdown("**Filters**")
        avoid_similar = st.checkbox("Avoid look-alike (I l 1 | O 0)", value=False, key="avoid_similar")
        anchor_first  = st.checkbox("Start with a letter", value=False, key="anchor_first")

    gen_cfg = GenerationConfig.from_flags(
        length, use_lower, use_upper, use_digits, use_symbols, avoid_similar, anchor_first
    )
    history = _history()

    if st.button("🎲 Generate", type="primary", use_container_width=True, key="generate"):
        outcome = generate_many(gen_cfg, int(count))
        if isinstance(outcome, GenerationFailure):
            st.session_state.pop("last_batch", None)
            st.error(outcome.message)
        else:
            for res in outcome:
                history.add(res.password)
            st.session_state["last_batch"] = (outcome, gen_cfg)

    batch = st.session_state.get("last_batch")
    if batch:
        results, batch_cfg = batch
        first = assess_strength(results[0].password, results[0].pool_size, batch_cfg)
        show_tone = getattr(st, first.label.tone)
        show_tone(
            f"Strength: **{first.label.value}** · estimated entropy **{first.entropy_bits} bits** "
            f"(pool {results[0].pool_size} chars)"
        )
        st.caption("Heuristic guidance only, not a security guarantee.")
        components.html(
            _password_table(results, batch_cfg, show_plain),
            height=min(720, 90 + 40 * len(results)),
        )

    st.markdown("**Recent passwords**")
    if len(history):
        df = pd.DataFrame(history.rows(masked=not show_plain))
        st.dataframe(df, use_container_width=True, hide_index=True)
        if st.button("Clear history", key="clear_history"):
            history.clear()
            st.session_state.pop("last_batch", None)
            st.rerun()
    else:
        st.info("No passwords generated yet.")
