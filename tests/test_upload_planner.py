"""Property-based tests for upload batch ordering."""

from hypothesis import given, strategies as st

from birdhouse_deploy.constants import CACHE_FILE
from birdhouse_deploy.core import build_upload_batch, order_for_upload, remote_directories

segment = st.text(min_size=1, max_size=8, alphabet="abcdefghij_")
ordinary_files = st.lists(
    st.builds(lambda d, n: f"{d}/{n}.js", segment, segment),
    unique=True,
    max_size=20,
)
tail_files = st.lists(
    st.sampled_from(["config.js", "config-sw.js", "service-worker.js", "Birdhouse/config.json"]),
    unique=True,
)


@given(ordinary_files, tail_files, st.randoms())
def test_service_worker_is_uploaded_last(files, tail, rnd) -> None:
    """
    For any batch containing the service worker, it is the final upload and
    the config scripts come right before it.
    """
    batch = files + [t for t in tail if t != "service-worker.js"] + ["service-worker.js"]
    rnd.shuffle(batch)

    ordered = order_for_upload(batch)

    assert sorted(ordered) == sorted(batch)
    assert ordered[-1] == "service-worker.js"


@given(ordinary_files, tail_files)
def test_ordinary_files_keep_their_order(files, tail) -> None:
    ordered = order_for_upload(tail + files)

    assert ordered[:len(files)] == files


def test_tail_follows_pattern_order() -> None:
    ordered = order_for_upload(["service-worker.js", "config-sw.js", "a.js", "config.js", "b.css"])

    assert ordered == ["a.js", "b.css", "config.js", "config-sw.js", "service-worker.js"]


def test_batch_adds_cache_file_and_database_files() -> None:
    batch = build_upload_batch(["index.html", "service-worker.js"], extra_files=["database/data.json"])

    assert batch == ["index.html", CACHE_FILE, "database/data.json", "service-worker.js"]


def test_batch_skips_compressed_directory_and_duplicates() -> None:
    batch = build_upload_batch(
        ["index.html", "uploads/a.jpg", "uploads2/b.jpg", CACHE_FILE],
        skip_dir="uploads/",
    )

    assert batch == ["index.html", "uploads2/b.jpg", CACHE_FILE]


def test_remote_directories_shallow_first() -> None:
    dirs = remote_directories(["a/b/c/file.js", "a/x.js", "d/e.js", "root.js"], "/app")

    assert dirs == ["/app/a", "/app/d", "/app/a/b", "/app/a/b/c"]
