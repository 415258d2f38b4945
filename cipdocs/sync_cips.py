"""
Read the CIPs repository README, mirror every CIP it lists into the docs
tree and copy the images/JSON they reference into the static folder.

Usage:
    python -m cipdocs.sync_cips [--docs-dir DIR] [--static-dir DIR]
        [--raw-base-url URL] [--repo-base-url URL]
        [--concurrency N] [--timeout SECONDS]
"""
import argparse, asyncio, os, pathlib, shutil, sys
from dataclasses import dataclass, field

import requests

from cipdocs import constants, fetch, slug, transform

ITEM_ERRORS = (requests.RequestException, OSError, UnicodeDecodeError)


@dataclass(frozen=True)
class SyncConfig:
    docs_dir: pathlib.Path = pathlib.Path(constants.DOCS_DIR)
    static_dir: pathlib.Path = pathlib.Path(constants.STATIC_DIR)
    raw_base: str = constants.RAW_BASE_URL
    repo_base: str = constants.REPO_BASE_URL
    concurrency: int = constants.CONCURRENCY
    timeout: float = constants.TIMEOUT

    def __post_init__(self):
        if self.concurrency < 1:
            raise ValueError("concurrency must be >= 1")

    @property
    def static_prefix(self) -> str:
        """Static folder as seen from a page in the docs folder"""
        return pathlib.Path(os.path.relpath(self.static_dir, self.docs_dir)).as_posix()

    def raw_url(self, *parts: str) -> str:
        return "/".join([self.raw_base.rstrip("/"), *parts])


@dataclass
class SyncResult:
    written: list[str] = field(default_factory=list)
    assets: int = 0
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def extract_cip_names(readme: str) -> list[str]:
    """CIP-XXXX identifiers in the order the README lists them, without duplicates"""
    return list(dict.fromkeys(m[:-1] for m in constants.INDEX_RE.findall(readme)))


def prepare_dir(path: pathlib.Path):
    if path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


def download_resources(cip: str, content: str, config: SyncConfig,
                       session: requests.Session | None = None) -> tuple[str, int]:
    """Copy relative images/JSON of a CIP into the static folder and relink them."""
    refs = [r for r in dict.fromkeys(constants.RESOURCE_RE.findall(content)) if not slug.is_remote(r)]
    if not refs:
        return content, 0

    target = config.static_dir / cip
    prepare_dir(target)
    written = 0

    for ref in refs:
        path = slug.asset_path(ref)
        out = target / slug.stored_name(path)
        # assets of a CIP only ever land in that CIP's folder
        if slug.escapes(path) or not out.resolve().is_relative_to(target.resolve()):
            print(f"✗ skipped : {cip} - {path} is outside the CIP folder")
            continue

        data = fetch.get_bytes(config.raw_url(cip, path), session, config.timeout)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_bytes(data)

        content = content.replace(ref, f"]({slug.static_link(config.static_prefix, cip, path)})")
        print(f"✓ saved   : {out}")
        written += 1

    return content, written


def process_cip(cip: str, config: SyncConfig, session: requests.Session | None = None) -> int:
    """Fetch, transform and write one CIP. Returns the number of assets written."""
    url = config.raw_url(cip, constants.README)
    print(f"↓ fetching: {url}")

    content = fetch.get_text(url, session, config.timeout)
    content, assets = download_resources(cip, content, config, session)
    content = transform.transform_cip(content, cip, raw_base=config.raw_base, repo_base=config.repo_base)

    out = config.docs_dir / f"{cip}.md"
    out.write_text(content, encoding="utf-8")
    print(f"✓ saved   : {out}")
    return assets


def _process_in_own_session(cip: str, config: SyncConfig) -> int:
    # requests.Session isn't thread-safe, each worker thread gets its own
    with fetch.new_session() as session:
        return process_cip(cip, config, session)


async def process_all(cips: list[str], config: SyncConfig) -> SyncResult:
    """Run process_cip for every CIP, at most config.concurrency at a time."""
    semaphore = asyncio.Semaphore(config.concurrency)

    async def _run_one(cip: str) -> tuple[str, int, str | None]:
        async with semaphore:
            try:
                return cip, await asyncio.to_thread(_process_in_own_session, cip, config), None
            except ITEM_ERRORS as e:
                print(f"✗ failed  : {cip} - {e}")
                return cip, 0, str(e)

    result = SyncResult()
    for cip, assets, error in await asyncio.gather(*(_run_one(c) for c in cips)):
        if error is None:
            result.written.append(cip)
            result.assets += assets
        else:
            result.failed[cip] = error
    return result


def sync(config: SyncConfig, session: requests.Session | None = None) -> SyncResult:
    """Mirror every CIP. `session` is only used for the index, items get their own."""
    print("CIP content downloading...")
    readme = fetch.get_text(config.raw_url(constants.README), session, config.timeout)
    cips = extract_cip_names(readme)

    prepare_dir(config.docs_dir)
    prepare_dir(config.static_dir)

    result = asyncio.run(process_all(cips, config))
    print(f"CIP content downloaded: {len(result.written)} written, "
          f"{result.assets} assets, {len(result.failed)} failed")
    return result


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return n


def parse_args(argv: list[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Mirror CIP documents into the docs tree")
    ap.add_argument("--docs-dir", type=pathlib.Path, default=pathlib.Path(constants.DOCS_DIR),
                    help="where the CIP pages go (cleared first)")
    ap.add_argument("--static-dir", type=pathlib.Path, default=pathlib.Path(constants.STATIC_DIR),
                    help="where images/JSON go (cleared first)")
    ap.add_argument("--raw-base-url", default=constants.RAW_BASE_URL)
    ap.add_argument("--repo-base-url", default=constants.REPO_BASE_URL)
    ap.add_argument("--concurrency", type=_positive_int, default=constants.CONCURRENCY,
                    help="CIPs fetched at the same time")
    ap.add_argument("--timeout", type=float, default=constants.TIMEOUT,
                    help="per-request timeout in seconds")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    ns = parse_args(sys.argv[1:] if argv is None else argv)
    config = SyncConfig(
        docs_dir=ns.docs_dir,
        static_dir=ns.static_dir,
        raw_base=ns.raw_base_url,
        repo_base=ns.repo_base_url,
        concurrency=ns.concurrency,
        timeout=ns.timeout,
    )

    try:
        result = sync(config)
    except requests.RequestException as e:
        print(f"Error: could not fetch the CIP index: {e}", file=sys.stderr)
        return 2

    return 0 if result.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
