from bs4 import BeautifulSoup

def listed(html):
    soup = BeautifulSoup(html, "lxml")
    return [
        (li.select_one(".title").get_text(strip=True), int(li.select_one(".comment-count").get_text(strip=True)))
        for li in soup.select("li.article")
    ]

def test_new_article_shows_on_home(logged_in):
    r = logged_in.post("/new-article", data={"title": "T", "content": "C", "author": "A"}, follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/"

    r = logged_in.get("/")
    assert r.status_code == 200
    assert ("T", 0) in listed(r.text)

def test_blank_author_defaults_to_session_user(logged_in, articles):
    logged_in.post("/new-article", data={"title": "T", "content": "C"})
    [article] = articles.list_page(0, 10)
    assert article.author == "alice"

def test_new_comment_shows_on_article(client, articles):
    article = articles.create("T", "C", "A")
    r = client.post(f"/new-comment/{article.id}", data={"content": "nice post", "author": "bob"}, follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == f"/articles/{article.id}"

    r = client.get(f"/articles/{article.id}")
    soup = BeautifulSoup(r.text, "lxml")
    comments = [(c.select_one(".author").get_text(strip=True), c.select_one(".content").get_text(strip=True))
                for c in soup.select("li.comment")]
    assert comments == [("bob", "nice post")]

    assert ("T", 1) in listed(client.get("/").text)

def test_anonymous_comment_author(client, articles):
    article = articles.create("T", "C", "A")
    client.post(f"/new-comment/{article.id}", data={"content": "hi"})
    [comment] = articles.comments_for(article.id)
    assert comment.author == "anonymous"

def test_comment_on_missing_article_is_404(client):
    r = client.post("/new-comment/999", data={"content": "hello", "author": "bob"})
    assert r.status_code == 404

def test_missing_article_is_404(client):
    assert client.get("/articles/999").status_code == 404

def test_home_pagination(client, articles):
    for i in range(25):
        articles.create(f"article {i}", "", "")

    first = listed(client.get("/").text)
    assert len(first) == 10
    assert first[0][0] == "article 24"

    assert len(listed(client.get("/?page=3").text)) == 5
    assert listed(client.get("/?page=abc").text) == first
    assert listed(client.get("/?page=-2").text) == first
    assert listed(client.get("/?page=99").text) == []

    soup = BeautifulSoup(client.get("/").text, "lxml")
    assert soup.select_one("nav.pagination")["data-total-pages"] == "3"

def test_articles_listing_page_size(client, articles):
    for i in range(12):
        articles.create(f"article {i}", "", "")

    soup = BeautifulSoup(client.get("/articles?page=2&page_size=5").text, "lxml")
    assert len(soup.select("li.article")) == 5
    assert soup.select_one("a.previous") is not None
    assert soup.select_one("a.next") is not None

    soup = BeautifulSoup(client.get("/articles?page=3&page_size=5").text, "lxml")
    assert len(soup.select("li.article")) == 2
    assert soup.select_one("a.next") is None

def test_edit_article(logged_in, articles):
    article = articles.create("T", "C", "A")
    r = logged_in.get(f"/edit-article/{article.id}")
    assert r.status_code == 200
    assert BeautifulSoup(r.text, "lxml").select_one("input[name=title]")["value"] == "T"

    r = logged_in.post(f"/edit-article/{article.id}", data={"title": "T2", "content": "C2", "author": "A2"}, follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == f"/articles/{article.id}"

    r = logged_in.get(f"/articles/{article.id}")
    soup = BeautifulSoup(r.text, "lxml")
    assert soup.select_one("h1.title").get_text(strip=True) == "T2"
    assert soup.select_one("div.content").get_text(strip=True) == "C2"

def test_edit_missing_article_is_404(logged_in):
    assert logged_in.get("/edit-article/999").status_code == 404
    assert logged_in.post("/edit-article/999", data={"title": "x"}).status_code == 404

def test_delete_article_page(logged_in, articles):
    article = articles.create("T", "C", "A")
    articles.add_comment(article, "c1", "bob")
    article_id = article.id

    r = logged_in.post(f"/delete-article/{article_id}", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/"
    assert logged_in.get(f"/articles/{article_id}").status_code == 404
    assert articles.comments_for(article_id) == []

def test_bad_id_is_400(client):
    assert client.get("/articles/abc").status_code == 400
    assert client.post("/new-comment/abc", data={"content": "x"}).status_code == 400

def test_titles_are_escaped(client, articles):
    articles.create("<script>alert(1)</script>", "", "")
    assert "<script>alert(1)</script>" not in client.get("/").text

def test_huge_page_number_is_an_empty_listing(client, articles):
    articles.create("T", "C", "A")
    r = client.get("/?page=99999999999999999999")
    assert r.status_code == 200
    assert listed(r.text) == []
    r = client.get("/articles?page=9999999999999999999")
    assert r.status_code == 200
    assert listed(r.text) == []

def test_out_of_range_ids_are_400(logged_in):
    huge = "99999999999999999999"
    assert logged_in.get(f"/articles/{huge}").status_code == 400
    assert logged_in.get("/articles/0").status_code == 400
    assert logged_in.post(f"/new-comment/{huge}", data={"content": "x"}).status_code == 400
    assert logged_in.get(f"/edit-article/{huge}").status_code == 400
    assert logged_in.post(f"/delete-article/{huge}").status_code == 400
    assert logged_in.put(f"/articles/{huge}", json={"title": "x"}).status_code == 400
    assert logged_in.delete(f"/articles/{huge}").status_code == 400
