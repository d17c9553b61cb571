from __future__ import annotations

from conftest import ACCESS_TOKEN, STORE_DOMAIN, article_node, metaobject_node, page_node, paged

from storefront_feeds import cli
from storefront_feeds.core.feed import service


def test_missing_configuration_exits_with_error(clean_env, capsys):
    exit_code = cli.main([])

    assert exit_code == 1
    err = capsys.readouterr().err
    assert err.startswith("❌ Error generating feed: Missing required environment variables")
    assert "SHOPIFY_STORE_DOMAIN" in err
    assert list(clean_env.iterdir()) == []


def test_successful_run_prints_report(clean_env, monkeypatch, capsys, router):
    router.add("GetArticles", paged("articles", [[article_node("a"), article_node("b")]]))
    router.add("GetPages", paged("pages", [[page_node("about")]]))
    router.add("GetMetaobjects", paged("metaobjects", [[metaobject_node("acme", "exhibitor", [])]]), metaobject_type="exhibitor")
    router.add("GetMetaobjects", paged("metaobjects", [[]]), metaobject_type="shows")

    monkeypatch.setenv("SHOPIFY_STORE_DOMAIN", STORE_DOMAIN)
    monkeypatch.setenv("STOREFRONT_ACCESS_TOKEN", ACCESS_TOKEN)
    monkeypatch.setenv("METAOBJECT_PAGE_DELAY", "0")

    real_run = service.run_feed_generation

    async def run_with_fake_transport(settings, output_dir=None):
        return await real_run(settings, output_dir=output_dir, transport=router.transport)

    monkeypatch.setattr(cli, "run_feed_generation", run_with_fake_transport)

    exit_code = cli.main(["--output-dir", str(clean_env / "feeds")])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Feeds generated successfully" in out
    assert "Items: 2 articles" in out
    assert "Items: 1 pages" in out
    assert "Items: 1 exhibitors" in out
    assert "Items: 0 shows" in out
    assert "Total: 4 items" in out
    assert sorted(p.name for p in (clean_env / "feeds").iterdir()) == [
        "doofinder-blogs-feed.xml",
        "doofinder-exhibitors-feed.xml",
        "doofinder-pages-feed.xml",
        "doofinder-shows-feed.xml",
    ]


def test_upstream_failure_exits_with_error(clean_env, monkeypatch, capsys, router):
    monkeypatch.setenv("SHOPIFY_STORE_DOMAIN", STORE_DOMAIN)
    monkeypatch.setenv("STOREFRONT_ACCESS_TOKEN", ACCESS_TOKEN)
    monkeypatch.setenv("METAOBJECT_PAGE_DELAY", "0")

    real_run = service.run_feed_generation

    async def run_with_fake_transport(settings, output_dir=None):
        return await real_run(settings, output_dir=output_dir, transport=router.transport)

    monkeypatch.setattr(cli, "run_feed_generation", run_with_fake_transport)

    assert cli.main([]) == 1
    assert "Shopify API error: 404" in capsys.readouterr().err


def test_invalid_setting_prints_single_line_error(clean_env, monkeypatch, capsys):
    monkeypatch.setenv("SHOPIFY_STORE_DOMAIN", STORE_DOMAIN)
    monkeypatch.setenv("STOREFRONT_ACCESS_TOKEN", ACCESS_TOKEN)
    monkeypatch.setenv("METAOBJECT_PAGE_DELAY", "abc")

    assert cli.main([]) == 1
    err = capsys.readouterr().err
    assert err.count("\n") == 1
    assert err.startswith("❌ Error generating feed: ")
    assert "metaobject_page_delay" in err
