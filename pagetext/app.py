from __future__ import annotations

import json
import logging
import os

from flask import Flask, abort, jsonify, redirect, render_template_string, request, url_for

from .config import Settings
from .db import init_db
from .errors import PageTextError
from .logging_setup import setup_logging
from .models import SourceFile
from .services.ingest import ingest_all
from .services.pipeline import DocumentTextPipeline

logger = logging.getLogger(__name__)

INDEX_HTML = """
<html><head><meta charset="utf-8" />
<title>PDF text</title>
<style>
  body{font-family:system-ui, -apple-system, Segoe UI, Roboto, Arial; margin:24px}
  table{border-collapse:collapse; width:100%} th,td{border:1px solid #ddd;padding:6px 8px;text-align:left; vertical-align: top}
  .pill{padding:6px 10px;border:1px solid #eee;border-radius:999px;background:#fafafa;margin-bottom:12px;display:inline-block}
  button{padding:8px 12px;border:1px solid #ccc;border-radius:8px;background:#fff;cursor:pointer}
</style></head><body>
<h2>Documents parsed from {{ data_dir }}/</h2>
<div class="pill">Last ingest: {{ ingest_label }}</div>
<table>
  <tr><th>File</th><th>Status</th><th>Mode</th><th>Pages</th><th>Template</th><th>Entries</th><th>Error</th></tr>
  {% for r in report %}
  <tr><td>{{ r.file or "" }}</td><td>{{ r.status }}</td><td>{{ r.mode or "" }}</td><td>{{ r.pages or "" }}</td>
      <td>{{ r.template or "" }}</td><td>{{ r.entries if r.entries is not none else "" }}</td><td>{{ r.error or r.reason or "" }}</td></tr>
  {% endfor %}
</table>
<form action="/reingest" method="post" style="margin-top:16px"><button>Re-scan {{ data_dir }}/</button></form>
</body></html>
"""


def create_app(
    settings: Settings | None = None,
    pipeline: DocumentTextPipeline | None = None,
    ingest_on_start: bool = True,
) -> Flask:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)
    pipeline = pipeline or DocumentTextPipeline.from_settings(settings)

    app = Flask(__name__)
    os.makedirs(settings.data_dir, exist_ok=True)
    engine, Session = init_db(settings.database_uri)
    app.config["SETTINGS"] = settings
    app.config["INGEST_REPORT"] = []

    def run_ingest():
        with Session() as s:
            app.config["INGEST_REPORT"] = ingest_all(s, settings.data_dir, pipeline)

    if ingest_on_start:
        run_ingest()

    @app.teardown_appcontext
    def remove_session(exc=None):
        Session.remove()

    @app.get("/")
    def index():
        rep = app.config.get("INGEST_REPORT") or []
        ok = sum(1 for r in rep if r.get("status") == "ok")
        skip = sum(1 for r in rep if r.get("status") == "skipped")
        err = sum(1 for r in rep if r.get("status") == "error")
        ingest_label = f"ok={ok}, skipped={skip}, errors={err}" if rep else "no files found"
        return render_template_string(INDEX_HTML, report=rep, ingest_label=ingest_label, data_dir=settings.data_dir)

    @app.post("/reingest")
    def reingest():
        run_ingest()
        return redirect(url_for("index"))

    @app.get("/api/documents")
    def api_documents():
        with Session() as s:
            docs = s.query(SourceFile).order_by(SourceFile.id).all()
            return jsonify([
                {
                    "id": d.id,
                    "file": os.path.basename(d.path),
                    "mode": d.mode,
                    "pages": d.page_count,
                    "template": d.template,
                    "ingested_at": d.ingested_at.isoformat() if d.ingested_at else None,
                }
                for d in docs
            ])

    @app.get("/api/documents/<int:doc_id>/pages")
    def api_document_pages(doc_id: int):
        with Session() as s:
            doc = s.get(SourceFile, doc_id)
            if doc is None:
                abort(404)
            # every page gets a key, even when it has no lines
            pages: dict[str, list[str]] = {str(n): [] for n in range(1, doc.page_count + 1)}
            for line in sorted(doc.lines, key=lambda l: (l.page_number, l.position)):
                pages[str(line.page_number)].append(line.text)
            return jsonify({"id": doc.id, "mode": doc.mode, "pages": pages})

    @app.get("/api/documents/<int:doc_id>/entries")
    def api_document_entries(doc_id: int):
        with Session() as s:
            doc = s.get(SourceFile, doc_id)
            if doc is None:
                abort(404)
            return jsonify({
                "id": doc.id,
                "template": doc.template,
                "entries": [json.loads(e.payload) for e in doc.entries],
            })

    @app.get("/api/text/<path:filename>")
    def api_text(filename: str):
        # live run, nothing is stored
        data_dir = os.path.abspath(settings.data_dir)
        path = os.path.abspath(os.path.join(data_dir, filename))
        if os.path.dirname(path) != data_dir or not os.path.isfile(path):
            abort(404)
        try:
            result = pipeline.extract(path, request.args.get("mode") or None)
        except ValueError as e:
            return jsonify({"file": filename, "error": str(e)}), 400
        except PageTextError as e:
            logger.warning("api_text_failed file=%s error=%s", filename, e)
            return jsonify({"file": filename, "error": str(e)}), 422
        return jsonify({
            "file": filename,
            "mode": result.mode.value,
            "pages": {str(n): lines for n, lines in result.pages.items()},
            "text": result.text(),
        })

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
