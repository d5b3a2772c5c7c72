"""HTML template assets for report rendering."""

from __future__ import annotations


def render_html_document(*, title: str, subtitle: str, dashboard_cards: str, ledger_table: str, scenario_table: str, validation_table: str, payload_json: str) -> str:
    return f"""<!doctype html>
<html lang=\"en\">
<head>
  <meta charset=\"utf-8\" />
  <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
  <title>{title}</title>
  <style>
    body {{ margin: 0; background: #f4f6f5; color: #1f2937; font: 15px/1.4 system-ui, 'Segoe UI', sans-serif; }}
    main {{ max-width: 1200px; margin: 0 auto; padding: 1.25rem; }}
    header h1 {{ margin: 0; font-size: 1.7rem; }}
    header p {{ margin: 0.2rem 0 1rem; color: #64748b; font-size: 0.9rem; }}
    nav {{ display: flex; gap: 0.25rem; border-bottom: 2px solid #0f766e; margin-bottom: 1rem; }}
    nav button {{ border: 0; background: none; padding: 0.5rem 0.9rem; font: inherit; font-weight: 600; color: #475569; cursor: pointer; }}
    nav button[aria-selected=\"true\"] {{ background: #0f766e; color: #fff; border-radius: 6px 6px 0 0; }}
    section[hidden] {{ display: none; }}
    .cards {{ display: flex; flex-wrap: wrap; gap: 0.5rem; margin-bottom: 1rem; }}
    .card {{ flex: 1 1 160px; background: #fff; border-left: 4px solid #0f766e; padding: 0.5rem 0.75rem; }}
    .card .k {{ font-size: 0.8rem; color: #64748b; text-transform: uppercase; letter-spacing: 0.03em; }}
    .card .v {{ font-size: 1.15rem; font-weight: 700; }}
    .charts {{ display: grid; gap: 1rem; grid-template-columns: repeat(auto-fit, minmax(340px, 1fr)); }}
    .charts canvas:first-child {{ grid-column: 1 / -1; }}
    canvas {{ width: 100%; height: 240px; background: #fff; }}
    .panel, .table-wrap {{ background: #fff; overflow-x: auto; }}
    table {{ border-collapse: collapse; width: 100%; font-size: 0.85rem; font-variant-numeric: tabular-nums; }}
    th {{ background: #e2e8f0; position: sticky; top: 0; }}
    th, td {{ padding: 0.3rem 0.5rem; border-bottom: 1px solid #e5e7eb; text-align: right; white-space: nowrap; }}
    th:first-child, td:first-child {{ text-align: left; }}
    .negative {{ color: #b91c1c; }}
  </style>
</head>
<body>
  <main>
    <header>
      <h1>{title}</h1>
      <p>{subtitle}</p>
    </header>
    <nav id=\"tabs\">
      <button data-tab=\"dashboard\" aria-selected=\"true\">Dashboard</button>
      <button data-tab=\"ledger\">Ledger</button>
      <button data-tab=\"scenario\">Scenario</button>
      <button data-tab=\"validation\">Scenario Validation</button>
    </nav>

    <section id=\"tab-dashboard\">
      <div class=\"cards\">{dashboard_cards}</div>
      <div class=\"charts\">
        <canvas id=\"chart-balance\"></canvas>
        <canvas id=\"chart-net-gain\"></canvas>
        <canvas id=\"chart-tax\"></canvas>
        <canvas id=\"chart-costs\"></canvas>
      </div>
    </section>
    <section id=\"tab-ledger\" hidden>{ledger_table}</section>
    <section id=\"tab-scenario\" hidden><div class=\"panel\">{scenario_table}</div></section>
    <section id=\"tab-validation\" hidden><div class=\"panel\">{validation_table}</div></section>
  </main>

  <script>
    const payload = {payload_json};
    const eur = new Intl.NumberFormat(undefined, {{ style: 'currency', currency: 'EUR', maximumFractionDigits: 0 }});
    const PAD = {{ left: 70, right: 12, top: 30, bottom: 22 }};

    document.getElementById('tabs').addEventListener('click', (event) => {{
      const target = event.target.closest('button');
      if (!target) return;
      for (const btn of document.querySelectorAll('#tabs button')) {{
        const selected = btn === target;
        btn.setAttribute('aria-selected', String(selected));
        document.getElementById('tab-' + btn.dataset.tab).hidden = !selected;
      }}
      render();
    }});

    function frame(id, title, years, lo, hi, series) {{
      const canvas = document.getElementById(id);
      if (!canvas || !canvas.offsetWidth) return null;
      canvas.width = canvas.offsetWidth;
      canvas.height = canvas.offsetHeight;
      const ctx = canvas.getContext('2d');
      const plotW = canvas.width - PAD.left - PAD.right;
      const plotH = canvas.height - PAD.top - PAD.bottom;
      const y = (v) => PAD.top + plotH * (hi - v) / (hi - lo || 1);
      const x = (i) => PAD.left + plotW * i / Math.max(1, years.length - 1);

      ctx.font = '11px sans-serif';
      ctx.fillStyle = '#64748b';
      ctx.strokeStyle = '#e5e7eb';
      for (const v of [lo, (lo + hi) / 2, hi]) {{
        ctx.beginPath(); ctx.moveTo(PAD.left, y(v)); ctx.lineTo(canvas.width - PAD.right, y(v)); ctx.stroke();
        ctx.fillText(eur.format(v), 4, y(v) + 4);
      }}
      ctx.fillText('Year ' + years[0], PAD.left, canvas.height - 6);
      ctx.fillText('Year ' + years[years.length - 1], canvas.width - PAD.right - 48, canvas.height - 6);

      ctx.font = 'bold 12px sans-serif';
      ctx.fillStyle = '#1f2937';
      ctx.fillText(title, PAD.left, 16);
      let legendX = PAD.left + ctx.measureText(title).width + 16;
      ctx.font = '11px sans-serif';
      for (const s of series) {{
        ctx.fillStyle = s.color; ctx.fillRect(legendX, 8, 10, 10);
        ctx.fillStyle = '#475569'; ctx.fillText(s.label, legendX + 14, 17);
        legendX += ctx.measureText(s.label).width + 30;
      }}
      return {{ ctx, x, y, plotW }};
    }}

    function lineChart(id, title, years, series) {{
      const values = series.flatMap((s) => s.values);
      const f = frame(id, title, years, Math.min(0, ...values), Math.max(1, ...values), series);
      if (!f) return;
      for (const s of series) {{
        f.ctx.strokeStyle = s.color;
        f.ctx.lineWidth = 2;
        f.ctx.beginPath();
        s.values.forEach((v, i) => (i ? f.ctx.lineTo(f.x(i), f.y(v)) : f.ctx.moveTo(f.x(i), f.y(v))));
        f.ctx.stroke();
      }}
    }}

    function stackedChart(id, title, years, series) {{
      const totals = years.map((_, i) => series.reduce((sum, s) => sum + Math.max(0, s.values[i]), 0));
      const f = frame(id, title, years, 0, Math.max(1, ...totals), series);
      if (!f) return;
      const barW = Math.max(2, f.plotW / years.length * 0.7);
      years.forEach((_, i) => {{
        let base = 0;
        for (const s of series) {{
          const v = Math.max(0, s.values[i]);
          f.ctx.fillStyle = s.color;
          f.ctx.fillRect(f.x(i) - barW / 2, f.y(base + v), barW, f.y(base) - f.y(base + v));
          base += v;
        }}
      }});
    }}

    function render() {{
      const ch = payload.charts;
      lineChart('chart-balance', 'Fund value', ch.years, [
        {{ label: 'Closing', values: ch.closingBalance, color: '#0f766e' }},
        {{ label: 'After sale', values: ch.afterSale, color: '#2563eb' }},
        {{ label: 'Contributed', values: ch.contributions, color: '#c2410c' }},
      ]);
      lineChart('chart-net-gain', 'Net gain after tax', ch.years, [
        {{ label: 'Net gain', values: ch.netGain, color: '#7c3aed' }},
      ]);
      stackedChart('chart-tax', 'Taxes', ch.years, [
        {{ label: 'On hold', values: ch.taxBurden.accrual, color: '#b91c1c' }},
        {{ label: 'On sale', values: ch.taxBurden.realization, color: '#f59e0b' }},
      ]);
      stackedChart('chart-costs', 'Costs', ch.years, [
        {{ label: 'Transaction', values: ch.costs.transaction, color: '#475569' }},
        {{ label: 'Management', values: ch.costs.management, color: '#94a3b8' }},
      ]);
    }}

    render();
    addEventListener('resize', render);
  </script>
</body>
</html>
"""
