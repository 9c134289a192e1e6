from __future__ import annotations
import argparse
import os
from flask import Flask, request, jsonify, Response
from catalog.engine import Engine
from catalog.cart import EmptyCartError
from catalog.models import Book
from catalog import config as CFG

app = Flask(__name__)
_engine: Engine | None = None

def _eng() -> Engine:
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call main() or set storefront.web._engine.")
    return _engine

def _book_json(b: Book) -> dict:
    return b.to_dict()

def _cart_json(eng: Engine) -> dict:
    cart = eng.cart
    lines = cart.lines if cart else []
    return {
        "lines": [{"id": ln.book_id, "title": ln.title, "price": ln.price,
                   "quantity": ln.quantity, "subtotal": ln.subtotal} for ln in lines],
        "count": cart.count if cart else 0,
        "total": cart.total if cart else 0.0,
        "notice": eng.ack.current,
    }

# ---------- errors ----------
@app.errorhandler(KeyError)
def _not_found(exc: KeyError):
    return jsonify({"error": "not found", "id": exc.args[0] if exc.args else None}), 404

@app.errorhandler(ValueError)
def _bad_request(exc: ValueError):
    # EmptyCartError carries the user-facing notice as its message
    return jsonify({"error": str(exc)}), 400

# ---------- API ----------
@app.get("/health")
def health():
    return jsonify({"ok": _engine is not None and _engine.cart is not None})

@app.get("/api/categories")
def api_categories():
    return jsonify(_eng().categories)

@app.get("/api/books")
def api_books():
    q = request.args.get("q", "", type=str)
    category = request.args.get("category", CFG.ALL_CATEGORY, type=str)
    rows = _eng().filter(category, q)
    return jsonify([_book_json(b) for b in rows])

@app.get("/api/books/<int:book_id>")
def api_book(book_id: int):
    return jsonify(_book_json(_eng().book(book_id)))

@app.get("/api/suggest")
def api_suggest():
    q = request.args.get("q", "", type=str)
    k = request.args.get("k", CFG.SUGGESTION_CAP, type=int)
    eng = _eng()
    rows = eng.suggest(q, cap=max(0, min(k, CFG.SUGGESTION_CAP)))
    return jsonify([{"text": s, "spans": [list(sp) for sp in eng.highlight(s, q)]} for s in rows])

@app.post("/api/books/<int:book_id>/rating")
def api_rate(book_id: int):
    payload = request.get_json(silent=True) or {}
    book = _eng().rate(book_id, payload.get("value"))
    return jsonify(_book_json(book))

@app.post("/api/books/<int:book_id>/comments")
def api_comment(book_id: int):
    payload = request.get_json(silent=True) or {}
    text = payload.get("text", "")
    if not isinstance(text, str):
        raise ValueError("comment text must be a string")
    return jsonify(_book_json(_eng().comment(book_id, text)))

@app.get("/api/cart")
def api_cart():
    return jsonify(_cart_json(_eng()))

@app.post("/api/cart")
def api_cart_add():
    payload = request.get_json(silent=True) or {}
    try:
        book_id = int(payload["id"])
        quantity = int(payload.get("quantity", 1))
    except (KeyError, TypeError) as exc:
        raise ValueError(f"expected {{'id': <book id>}}: {exc!r}") from exc
    eng = _eng()
    eng.add_to_cart(book_id, quantity)
    return jsonify(_cart_json(eng))

@app.delete("/api/cart/<int:book_id>")
def api_cart_remove(book_id: int):
    eng = _eng()
    eng.remove_from_cart(book_id)
    return jsonify(_cart_json(eng))

@app.post("/api/checkout")
def api_checkout():
    eng = _eng()
    try:
        receipt = eng.checkout()
    except EmptyCartError as exc:
        return jsonify({"error": str(exc), "cart": _cart_json(eng)}), 400
    return jsonify({
        "order_id": receipt.order_id,
        "total": receipt.total,
        "items": sum(ln.quantity for ln in receipt.lines),
        "message": "تمت عملية الشراء بنجاح",
    })

# ---------- UI ----------
@app.get("/")
def home():
    # Single page: CSS variables + vanilla JS against the API above.
    html = r"""
<!doctype html>
<html lang="ar" dir="rtl">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>متجر الكتب</title>
<style>
:root{
  --bg:#f1f5f9;
  --panel:#ffffff;
  --ink:#1f2937;
  --muted:#6b7280;
  --accent:#0284c7;
  --accent-2:#0369a1;
  --border:#e5e7eb;
  --star:#facc15;
  --ok:#16a34a;
  --mark-bg:#e0f2fe;
}
*{box-sizing:border-box}
body{ margin:0; background:var(--bg); color:var(--ink); font:16px/1.5 Tajawal,system-ui,sans-serif }
header{ background:var(--panel); box-shadow:0 2px 6px rgba(0,0,0,.08); position:sticky; top:0; z-index:40 }
.bar{ max-width:1100px; margin:auto; padding:14px 16px; display:flex; gap:12px; align-items:center; justify-content:space-between; flex-wrap:wrap }
h1{ margin:0; font-size:26px; color:var(--accent-2) }
.search{ position:relative; width:min(360px,100%) }
.search input{ width:100%; padding:9px 14px; border:1px solid var(--border); border-radius:999px; font-size:15px; outline:none }
.search input:focus{ border-color:var(--accent) }
.sugg{ display:none; position:absolute; inset-inline:0; top:110%; background:var(--panel); border:1px solid var(--border); border-radius:10px; overflow:hidden; box-shadow:0 8px 24px rgba(0,0,0,.12) }
.sugg div{ padding:8px 12px; cursor:pointer }
.sugg div:hover{ background:var(--mark-bg) }
mark{ background:none; color:var(--accent-2); font-weight:700 }
.cart-btn{ padding:8px 14px; border-radius:999px; border:1px solid var(--border); background:var(--panel); cursor:pointer }
main{ max-width:1100px; margin:auto; padding:24px 16px }
.chips{ display:flex; flex-wrap:wrap; gap:8px; justify-content:center; margin-bottom:24px }
.chip{ padding:7px 16px; border-radius:999px; border:none; background:var(--panel); cursor:pointer; font-weight:600 }
.chip.on{ background:var(--accent); color:#fff }
.grid{ display:grid; grid-template-columns:repeat(auto-fill,minmax(220px,1fr)); gap:20px }
.card{ background:var(--panel); border-radius:12px; overflow:hidden; box-shadow:0 2px 8px rgba(0,0,0,.08); cursor:pointer; transition:transform .2s }
.card:hover{ transform:translateY(-4px) }
.card img{ width:100%; height:260px; object-fit:cover }
.card .body{ padding:12px }
.card h3{ margin:0 0 4px; font-size:17px; white-space:nowrap; overflow:hidden; text-overflow:ellipsis }
.muted{ color:var(--muted); font-size:14px }
.stars button{ background:none; border:none; padding:0 1px; font-size:18px; color:#d1d5db; cursor:default }
.stars button.on{ color:var(--star) }
.stars.edit button{ cursor:pointer; font-size:24px }
.empty{ text-align:center; padding:60px 0; color:var(--muted) }
.modal{ display:none; position:fixed; inset:0; background:rgba(0,0,0,.6); z-index:50; align-items:center; justify-content:center; padding:16px }
.sheet{ background:#f9fafb; border-radius:12px; max-width:900px; width:100%; max-height:90vh; overflow:auto; padding:24px; position:relative }
.close{ position:absolute; top:12px; left:12px; border:none; background:none; font-size:26px; cursor:pointer }
.btn{ padding:8px 14px; border-radius:8px; border:none; background:var(--accent); color:#fff; cursor:pointer; font-weight:600 }
.btn.green{ background:var(--ok) }
.comment{ display:flex; gap:10px; margin:10px 0 }
.comment img{ width:36px; height:36px; border-radius:50% }
.toast{ display:none; position:fixed; bottom:20px; inset-inline-start:20px; background:var(--ok); color:#fff; padding:10px 16px; border-radius:10px; z-index:60 }
</style>
</head>
<body>
<header>
  <div class="bar">
    <h1>متجر ريماس للكتب</h1>
    <div class="search" id="searchbox">
      <input id="q" type="text" placeholder="ابحث عن كتاب، مؤلف..." autocomplete="off" />
      <div id="sugg" class="sugg"></div>
    </div>
    <button id="cartBtn" class="cart-btn">السلة (<span id="cartCount">0</span>)</button>
  </div>
</header>
<main>
  <div id="chips" class="chips"></div>
  <div id="grid" class="grid"></div>
  <div id="empty" class="empty" style="display:none">
    <h2>لم يتم العثور على كتب</h2>
    <p>حاول تغيير فلتر البحث أو التصنيف.</p>
  </div>
</main>
<div id="modal" class="modal"><div class="sheet" id="sheet"></div></div>
<div id="cartModal" class="modal"><div class="sheet" id="cartSheet"></div></div>
<div id="toast" class="toast"></div>

<script>
const $ = (sel) => document.querySelector(sel);
const ALL = "الكل";
let category = ALL, t;

function esc(s){ return String(s).replace(/[&<>"']/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;","'":"&#39;"}[c])); }
function marked(text, spans){
  let out = "", at = 0;
  for(const [s,e] of spans){ out += esc(text.slice(at,s)) + "<mark>" + esc(text.slice(s,e)) + "</mark>"; at = e; }
  return out + esc(text.slice(at));
}
function stars(rating, editable){
  let h = `<span class="stars${editable ? " edit" : ""}">`;
  for(let i=1;i<=5;i++) h += `<button data-v="${i}" class="${i<=rating?"on":""}" ${editable?"":"disabled"}>★</button>`;
  return h + "</span>";
}
async function api(path, opts){
  const resp = await fetch(path, opts);
  const data = await resp.json();
  if(!resp.ok) throw new Error(data.error || `HTTP ${resp.status}`);
  return data;
}
function post(path, body, method){
  return api(path, {method: method || "POST", headers: {"Content-Type":"application/json"}, body: JSON.stringify(body || {})});
}
function toast(msg){
  const el = $("#toast"); el.textContent = msg; el.style.display = "block";
  clearTimeout(toast.t); toast.t = setTimeout(() => el.style.display = "none", 3000);
}

async function loadChips(){
  const cats = await api("/api/categories");
  $("#chips").innerHTML = cats.map(c => `<button class="chip${c===category?" on":""}" data-c="${esc(c)}">${esc(c)}</button>`).join("");
}
async function loadBooks(){
  const q = $("#q").value;
  const rows = await api(`/api/books?q=${encodeURIComponent(q)}&category=${encodeURIComponent(category)}`);
  $("#empty").style.display = rows.length ? "none" : "block";
  $("#grid").innerHTML = rows.map(b => `
    <div class="card" data-id="${b.id}">
      <img src="${esc(b.coverImage)}" alt="غلاف كتاب ${esc(b.title)}" />
      <div class="body">
        <h3>${esc(b.title)}</h3>
        <div class="muted">${esc(b.author)}</div>
        <div>${stars(b.rating)} <span class="muted">(${b.ratingsCount})</span></div>
      </div>
    </div>`).join("");
}
async function loadSuggestions(){
  const q = $("#q").value, box = $("#sugg");
  if(!q.trim()){ box.style.display = "none"; return; }
  const rows = await api(`/api/suggest?q=${encodeURIComponent(q)}`);
  box.innerHTML = rows.map(r => `<div data-s="${esc(r.text)}">${marked(r.text, r.spans)}</div>`).join("");
  box.style.display = rows.length ? "block" : "none";
}
async function refreshCart(){
  const cart = await api("/api/cart");
  $("#cartCount").textContent = cart.count;
  return cart;
}

async function openBook(id){
  const b = await api(`/api/books/${id}`);
  const comments = b.comments.length ? b.comments.map(c => `
      <div class="comment"><img src="${esc(c.avatar)}" alt="${esc(c.user)}" />
      <div><b>${esc(c.user)}</b><div class="muted">${esc(c.text)}</div></div></div>`).join("")
    : `<p class="muted">لا توجد تعليقات بعد.</p>`;
  $("#sheet").innerHTML = `
    <button class="close" data-close>×</button>
    <h2>${esc(b.title)}</h2>
    <p class="muted">${esc(b.author)}</p>
    <div>${stars(b.rating)} ${b.rating.toFixed(1)} <span class="muted">(${b.ratingsCount} تقييم)</span></div>
    <p>${esc(b.description)}</p>
    <p><b>$${b.price}</b> <button class="btn green" id="buy" data-id="${b.id}">أضف إلى السلة</button></p>
    <h4>أضف تقييمك:</h4>
    <div id="rate" data-id="${b.id}">${stars(0, true)}</div>
    <h4>التقييمات والتعليقات</h4>
    ${comments}
    <form id="commentForm" data-id="${b.id}">
      <input id="commentText" placeholder="أضف تعليقًا..." />
      <button class="btn" type="submit">إرسال</button>
    </form>`;
  $("#modal").style.display = "flex";
}
async function openCart(){
  const cart = await refreshCart();
  const rows = cart.lines.length ? cart.lines.map(l => `
      <div class="comment"><div>${esc(l.title)} × ${l.quantity} = $${l.subtotal.toFixed(2)}</div>
      <button class="btn" data-remove="${l.id}">حذف</button></div>`).join("")
    : `<p class="muted">سلة التسوق فارغة</p>`;
  $("#cartSheet").innerHTML = `
    <button class="close" data-close>×</button>
    <h2>سلة التسوق</h2>${rows}
    <p><b>المجموع: $${cart.total.toFixed(2)}</b></p>
    <button class="btn green" id="checkout">إتمام الشراء</button>`;
  $("#cartModal").style.display = "flex";
}

$("#q").addEventListener("input", () => { clearTimeout(t); t = setTimeout(() => { loadSuggestions(); loadBooks(); }, 120); });
$("#q").addEventListener("focus", loadSuggestions);
document.addEventListener("mousedown", (ev) => { if(!$("#searchbox").contains(ev.target)) $("#sugg").style.display = "none"; });
$("#sugg").addEventListener("click", (ev) => {
  const item = ev.target.closest("[data-s]"); if(!item) return;
  $("#q").value = item.dataset.s; $("#sugg").style.display = "none"; loadBooks();
});
$("#chips").addEventListener("click", (ev) => {
  const chip = ev.target.closest("[data-c]"); if(!chip) return;
  category = chip.dataset.c; loadChips(); loadBooks();
});
$("#grid").addEventListener("click", (ev) => { const c = ev.target.closest("[data-id]"); if(c) openBook(c.dataset.id); });
$("#cartBtn").addEventListener("click", openCart);
document.addEventListener("click", async (ev) => {
  const el = ev.target;
  try{
    if(el.matches("[data-close]") || el.classList.contains("modal")){ el.closest(".modal").style.display = "none"; }
    else if(el.id === "buy"){ const cart = await post("/api/cart", {id: Number(el.dataset.id)}); $("#cartCount").textContent = cart.count; toast(cart.notice); }
    else if(el.matches("#rate button")){ await post(`/api/books/${el.closest("#rate").dataset.id}/rating`, {value: Number(el.dataset.v)}); openBook(el.closest("#rate").dataset.id); loadBooks(); }
    else if(el.dataset.remove){ await api(`/api/cart/${el.dataset.remove}`, {method:"DELETE"}); openCart(); }
    else if(el.id === "checkout"){ const r = await post("/api/checkout"); toast(r.message); $("#cartModal").style.display = "none"; refreshCart(); }
  }catch(e){ toast(e.message); }
});
document.addEventListener("submit", async (ev) => {
  ev.preventDefault();
  const form = ev.target, text = $("#commentText").value;
  if(!text.trim()) return;
  await post(`/api/books/${form.dataset.id}/comments`, {text});
  openBook(form.dataset.id);
});

loadChips(); loadBooks(); refreshCart();
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run the bookstore Flask UI on top of Engine")
    ap.add_argument("--catalog", default=os.environ.get("BOOKSTORE_CATALOG"),
                    help="JSON catalog file (default: packaged catalog)")
    ap.add_argument("--db", dest="db", default=os.environ.get("BOOKSTORE_DB", CFG.DEFAULT_STORE_DSN),
                    help='cart store DSN: "sqlite:///path" or "memory://"')
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true",
                    default=os.environ.get("BOOKSTORE_VERBOSE") == "1")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    _engine.build(args.catalog, db_dsn=args.db, verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
