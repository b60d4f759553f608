# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Parsing of `dpkg --contents` output.

Each line looks like a `tar -tv` entry:

    drwxr-xr-x root/root         0 2016-06-20 10:00 ./opt/TestApp/

Everything up to and including the first "." is metadata; what remains is
the absolute install path. Locale packs and the bundled libgcrypt depend on
the build machine, so they are filtered out before comparison.
"""

from collections.abc import Iterable

from packcheck.utils.paths import sort_paths


def parse_contents_listing(output: str) -> list[str]:
    """
    Strip the metadata prefix from every non-blank line.

    A line without any "." is kept whole.
    """
    paths: list[str] = []
    for line in output.split("\n"):
        if not line.strip():
            continue
        paths.append(line[line.find(".") + 1:])
    return paths


def noise_prefixes(product_name: str) -> tuple[str, ...]:
    """Install-path prefixes excluded from content comparisons."""
    return (
        f"/opt/{product_name}/locales/",
        f"/opt/{product_name}/libgcrypt",
    )


def filter_noise(paths: Iterable[str], product_name: str) -> list[str]:
    prefixes = noise_prefixes(product_name)
    return [path for path in paths if not path.startswith(prefixes)]


def package_contents(output: str, product_name: str) -> list[str]:
    """Parsed, filtered and sorted listing ready for comparison."""
    return sort_paths(filter_noise(parse_contents_listing(output), product_name))
