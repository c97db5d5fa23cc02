from models.product import Product


HEADER = "id,name,unit,category,brand,stock,status,image"


def test_export_headers_and_rows(client, make_product):
    p = make_product("Hammer", stock=10, unit="pcs", category="tools", brand="Acme", status="ok")

    resp = client.get("/api/products/export")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert resp.headers["content-disposition"] == 'attachment; filename="products.csv"'

    lines = resp.text.split("\n")
    assert lines[0] == HEADER
    assert lines[1] == f"{p.id},Hammer,pcs,tools,Acme,10,ok,"
    assert lines[2] == ""


def test_export_escapes_commas_and_quotes(client, make_product):
    make_product('Widget, "Pro"', stock=1)
    make_product("Line\nBreak", stock=2)

    text = client.get("/api/products/export").text
    assert '"Widget, ""Pro"""' in text
    assert '"Line\nBreak"' in text


def test_export_quotes_carriage_return(client, make_product):
    make_product("Line\rBreak", stock=1)

    text = client.get("/api/products/export").text
    assert '"Line\rBreak"' in text


def test_export_empty_store(client):
    assert client.get("/api/products/export").text == HEADER + "\n"


def test_export_then_reimport_is_idempotent(client, db, make_product, csv_upload):
    make_product("Hammer", stock=10, category="tools")
    make_product('Widget, "Pro"', stock=1)
    make_product("Saw", stock=0, brand="Acme")

    exported = client.get("/api/products/export").text
    resp = client.post("/api/products/import", files=csv_upload(exported))

    assert resp.json() == {"added": 0, "skipped": 3}
    db.expire_all()
    assert db.query(Product).count() == 3
