import pytest

from mediascan.monitor.signals import MalformedInput
from mediascan.monitor.url_heuristics import (
    analyze_url,
    evaluate_url,
    extract_hostname,
    infer_mime_type,
    parse_hostname,
)


def test_neutral_url():
    signal = analyze_url("https://news.example.org/photos/portrait.jpg")
    assert not signal.is_suspicious
    assert not signal.is_uncertain
    assert signal.hostname == "news.example.org"


@pytest.mark.parametrize(
    "url",
    [
        "https://bit.ly/3abcd",
        "https://tinyurl.com/xyz",
        "https://cdn.example.com/tmp/upload.png",
        "https://example.com/images/AI-portrait.jpg",
        "https://fakeimg.pl/300x200",
        "https://example.com/Generated/face.webp",
    ],
)
def test_suspicious_urls(url):
    assert analyze_url(url).is_suspicious


@pytest.mark.parametrize(
    "url",
    [
        "https://images.unsplash.com/photo-123",
        "https://picsum.photos/200/300",
        "https://res.cloudinary.com/demo/image/upload/sample.jpg",
        "https://s3.amazonaws.com/temp/cat.jpg",
    ],
)
def test_uncertain_urls(url):
    assert analyze_url(url).is_uncertain


def test_lists_are_checked_independently():
    signal = analyze_url("https://via.placeholder.com/fake.png")
    assert signal.is_suspicious
    assert signal.is_uncertain


def test_hostname_is_lower_cased():
    assert analyze_url("https://CDN.Example.COM/a.png").hostname == "cdn.example.com"


def test_malformed_url_still_yields_signal():
    signal = analyze_url("http://[::1")
    assert signal.hostname == ""
    assert not signal.is_uncertain


def test_parse_hostname_raises_malformed_input():
    with pytest.raises(MalformedInput):
        parse_hostname("http://[::1")
    assert extract_hostname("http://[::1") == ""


def test_url_outcome_is_always_fulfilled():
    outcome = evaluate_url("not a url at all")
    assert outcome.ok
    assert outcome.value.hostname == ""


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://example.com/a/photo.JPG", "image/jpeg"),
        ("https://example.com/clip.webm?token=1", "video/webm"),
        ("https://example.com/movie.mov#t=3", "video/quicktime"),
        ("https://example.com/file.avi", "video/x-msvideo"),
        ("https://example.com/page.html", None),
        ("https://example.com/download", None),
        ("https://example.com.au/", None),
    ],
)
def test_infer_mime_type(url, expected):
    assert infer_mime_type(url) == expected
