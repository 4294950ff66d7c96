import os
import sys
import argparse

import requests

from wordcounter.app.storage import locator_name

DEFAULT_URL = os.environ.get("WORDCOUNTER_URL", "http://localhost:7002")
TIMEOUT_S = int(os.environ.get("WORDCOUNTER_TIMEOUT_S", "60"))

def upload(path: str, base_url: str = DEFAULT_URL) -> str:
    """Sube un .txt y devuelve el locator del resultado."""
    with open(path, "rb") as f:
        files = {"file": (os.path.basename(path), f, "text/plain")}
        r = requests.post(f"{base_url.rstrip('/')}/wordcounter/countwords", files=files, timeout=TIMEOUT_S)
    r.raise_for_status()
    return r.json()

def download(locator: str, dest_dir: str = ".") -> str:
    name = locator_name(locator)
    r = requests.get(locator, timeout=TIMEOUT_S)
    r.raise_for_status()
    os.makedirs(dest_dir, exist_ok=True)
    out_path = os.path.join(dest_dir, name)
    with open(out_path, "wb") as f:
        f.write(r.content)
    return out_path

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="wordcounter", description="WordCounter client")
    parser.add_argument("--url", default=DEFAULT_URL, help="base URL of the service")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_count = sub.add_parser("count", help="upload a text file and print the result locator")
    p_count.add_argument("file")
    p_count.add_argument("--fetch", metavar="DIR", help="also download the result into DIR")

    p_fetch = sub.add_parser("fetch", help="download a result by locator")
    p_fetch.add_argument("locator")
    p_fetch.add_argument("dest", nargs="?", default=".")

    args = parser.parse_args(argv)
    try:
        if args.cmd == "count":
            locator = upload(args.file, args.url)
            print(locator, flush=True)
            if args.fetch:
                print(download(locator, args.fetch), flush=True)
        else:
            print(download(args.locator, args.dest), flush=True)
    except requests.HTTPError as e:
        detail = e.response.text if e.response is not None else str(e)
        print(f"ERROR: {e} {detail}", file=sys.stderr, flush=True)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
