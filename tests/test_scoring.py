from urlsentry.scoring import enrich_score, enrich_scores


def test_enrich_score_has_expected_keys():
    result = enrich_score("http://example.com")

    for key in ["url", "status", "score", "reasons", "features", "recommendation"]:
        assert key in result

    assert result["url"] == "http://example.com"
    assert isinstance(result["reasons"], list)
    assert isinstance(result["features"], dict)


def test_recommendation_follows_status():
    assert enrich_score("https://www.google.com")["recommendation"] is None
    assert enrich_score("https://bit.ly/abc")["recommendation"].startswith("Exercise caution")
    assert enrich_score("http://192.168.1.1/login")["recommendation"].startswith("Do not visit")


def test_enrich_scores_keeps_order():
    urls = ["https://www.google.com", "http://192.168.1.1/login", "http://"]
    results = enrich_scores(urls)

    assert [r["url"] for r in results] == urls
    assert [r["status"] for r in results] == ["safe", "dangerous", "suspicious"]
