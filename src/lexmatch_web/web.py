from __future__ import annotations
import argparse
import dataclasses
from flask import Flask, request, jsonify, Response
from lexmatch.engine import Engine
from lexmatch.errors import ConfigurationError, ResourceError
from lexmatch.models import CountResult, CoverageRecord, LineCoverage, MatchOptions, MatchResult

app = Flask(__name__)
_engine: Engine | None = None

# request field -> MatchOptions field; case folding is fixed when lexicons are loaded
_OPTION_FIELDS = {
    "mode": "mode",
    "all": "all_matches",
    "freq": "freq_threshold",
    "verbose": "verbose",
    "min_token_length": "min_token_length",
    "max_window_length": "max_window_length",
    "coverage": "coverage",
    "coverage_matrix": "coverage_matrix",
    "count_only": "suppress_offsets",
    "unicode_boundaries": "unicode_boundaries",
}


def _request_engine(payload: dict) -> Engine:
    """A per-request Engine sharing the (read-only) lexicons of the global one."""
    overrides = {dst: payload[src] for src, dst in _OPTION_FIELDS.items() if src in payload}
    options = dataclasses.replace(_engine.options, **overrides)  # type: ignore[union-attr]
    eng = Engine(options)
    eng.attach(_engine.lexicons)  # type: ignore[union-attr,arg-type]
    return eng


# ---------- API ----------
@app.get("/api/health")
def api_health():
    names = list(_engine.lexicons.names) if _engine and _engine.lexicons else []
    return jsonify({"ok": _engine is not None, "lexicons": names})


@app.post("/api/match")
def api_match():
    if _engine is None or _engine.lexicons is None:
        return jsonify({"error": "no lexicons loaded"}), 503
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return jsonify({"error": "expected a JSON object"}), 400
    text = payload.get("text", "")
    if not isinstance(text, str):
        return jsonify({"error": "'text' must be a string"}), 400
    try:
        eng = _request_engine(payload)
    except (ConfigurationError, TypeError) as e:
        return jsonify({"error": str(e)}), 400

    out: dict = {"matches": [], "coverage": [], "lines": []}
    for record in eng.run([eng.document(payload.get("id", "request"), text)]):
        if isinstance(record, (MatchResult, CountResult)):
            out["matches"].append(record.to_dict())
        elif isinstance(record, CoverageRecord):
            out["coverage"].append(record.to_dict())
        elif isinstance(record, LineCoverage):
            out["lines"].append(record.to_dict())
    return jsonify(out)


# ---------- UI ----------
@app.get("/")
def home():
    html = r"""
<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<title>Lexicon matcher</title>
<style>
body{margin:24px auto;max-width:900px;font:15px/1.45 system-ui,sans-serif;background:#0b0f14;color:#cfd8e3}
textarea{width:100%;height:10rem;background:#0f141b;color:inherit;border:1px solid #1c2530;border-radius:8px;padding:8px}
select,button{background:#0f141b;color:inherit;border:1px solid #1c2530;border-radius:6px;padding:6px 10px}
table{width:100%;border-collapse:collapse;margin-top:12px}
td,th{border-top:1px solid #1c2530;padding:4px 8px;text-align:left;font-variant-numeric:tabular-nums}
.muted{color:#8a94a6}
</style>
</head>
<body>
<h1>Lexicon matcher</h1>
<form id="f">
  <textarea id="text" placeholder="Paste text to match against the loaded lexicons"></textarea>
  <p>
    <select id="mode">
      <option value="tokens">tokens</option>
      <option value="substring">substring (exact)</option>
      <option value="window">character windows</option>
    </select>
    <button type="submit">Match</button>
    <span id="stats" class="muted"></span>
  </p>
</form>
<table><thead><tr><th>Text</th><th>Lexicon</th><th>Begin</th><th>End</th></tr></thead><tbody id="out"></tbody></table>
<script>
const esc = (s) => String(s).replace(/[&<>"]/g, (c) => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c]));
document.getElementById("f").addEventListener("submit", async (ev) => {
  ev.preventDefault();
  const mode = document.getElementById("mode").value;
  const body = {text: document.getElementById("text").value, mode, verbose: true};
  if (mode !== "substring") body.coverage = true;
  if (mode === "window") body.max_window_length = 4;
  const resp = await fetch("/api/match", {method: "POST", headers: {"Content-Type": "application/json"}, body: JSON.stringify(body)});
  const data = await resp.json();
  if (!resp.ok) { document.getElementById("stats").textContent = data.error; return; }
  document.getElementById("out").innerHTML = data.matches.map((m) =>
    `<tr><td>${esc(m.text)}</td><td>${esc((m.lexicons || []).join(";"))}</td><td>${m.begin}</td><td>${m.end}</td></tr>`).join("");
  const cov = data.coverage.map((c) => `${c.lexicon ?? "all"}: ${c.matched}/${c.total}`).join(" • ");
  document.getElementById("stats").textContent = `${data.matches.length} matches ${cov}`;
});
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the Flask matching API on top of Engine")
    ap.add_argument("-l", "--lexicon", action="append", default=[])
    ap.add_argument("-q", "--query", action="append", default=[])
    ap.add_argument("-i", "--ignore-case", action="store_true")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine(MatchOptions(mode="tokens", case_insensitive=args.ignore_case), verbose=args.verbose)
    try:
        _engine.load(args.lexicon, args.query)
    except ConfigurationError as e:
        ap.error(str(e))
    except ResourceError as e:
        ap.exit(1, f"ERROR: {e}\n")

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
