"""Search ArtifactHub for Helm packages and rank them."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import requests
import yaml

from meshkit.errors import (
    MeshKitError,
    err_get_ah_package,
    err_get_all_helm_packages,
    err_get_chart_url,
    err_reading_remote_file,
    err_remote_file_not_found,
)

log = logging.getLogger(__name__)

ARTIFACT_HUB_API_ENDPOINT = "https://artifacthub.io/api/v1"
ARTIFACT_HUB_CHART_URL_FIELD_NAME = "content_url"
AH_HELM_EXPORTER_ENDPOINT = ARTIFACT_HUB_API_ENDPOINT + "/helm-exporter"
AH_TEXT_SEARCH_QUERY_FIELD_NAME = "ts_query_web"

AH_API_SEARCH_PARAMS = {
    "offset": "0",
    "limit": "10",
    "facets": "false",
    "kind": "0",  # Helm charts
    "sort": "relevance",
}

RANKING_PARAMETER_WEIGHTAGE = {
    "official": 5,
    "verifiedPublisher": 10,
}

_TIMEOUT = 30


@dataclass
class AhPackage:
    """An ArtifactHub package and what is needed to locate its chart."""

    name: str = ""
    repository: str = ""
    organization: str = ""
    repo_url: str = ""
    chart_url: str = ""
    official: bool = False
    verified_publisher: bool = False
    cncf: bool = False
    version: str = ""

    def update_package_data(self) -> None:
        """Fill in ``chart_url`` from the repository's Helm index, if unset."""
        if self.chart_url:
            return
        suffix = "index.yaml" if self.repo_url.endswith("/") else "/index.yaml"
        try:
            index_text = _read_remote_file(self.repo_url + suffix)
        except MeshKitError as exc:
            raise err_get_chart_url(exc) from exc
        try:
            index = yaml.safe_load(index_text)
        except yaml.YAMLError as exc:
            raise err_get_chart_url(exc) from exc

        chart_url = _chart_url_from_index(index, self.name)
        if not chart_url.startswith("http"):
            if not self.repo_url.endswith("/"):
                self.repo_url += "/"
            chart_url = self.repo_url + chart_url
        self.chart_url = chart_url


def _chart_url_from_index(index: Any, name: str) -> str:
    missing = err_get_chart_url(ValueError("Cannot extract chartUrl from repository helm index"))
    if not isinstance(index, dict):
        raise missing
    entries = index.get("entries")
    if not isinstance(entries, dict):
        raise missing
    versions = entries.get(name)
    if not isinstance(versions, list) or not versions or not isinstance(versions[0], dict):
        raise missing
    urls = versions[0].get("urls")
    if not isinstance(urls, list) or not urls:
        raise missing
    chart_url = urls[0]
    if not isinstance(chart_url, str) or not chart_url:
        raise missing
    return chart_url


def _read_remote_file(url: str) -> str:
    try:
        response = requests.get(url, timeout=_TIMEOUT)
    except requests.RequestException as exc:
        raise err_reading_remote_file(exc) from exc
    if response.status_code == 404:
        raise err_remote_file_not_found(url)
    if response.status_code != 200:
        raise err_reading_remote_file(
            RuntimeError(f"status code {response.status_code} for {url}")
        )
    return response.text


def get_package_score(pkg: AhPackage) -> int:
    """Score a package: verified publishers and official packages rank higher."""
    score = 1
    if pkg.verified_publisher:
        score += RANKING_PARAMETER_WEIGHTAGE["verifiedPublisher"]
    if pkg.official:
        score += RANKING_PARAMETER_WEIGHTAGE["official"]
    return score


def sort_packages_with_score(pkgs: Iterable[AhPackage]) -> list[AhPackage]:
    """Return packages ordered by descending score, keeping ties in order."""
    return sorted(pkgs, key=get_package_score, reverse=True)


def get_ah_packages_with_name(name: str) -> list[AhPackage]:
    """Search ArtifactHub for Helm packages matching ``name``."""
    url = f"{ARTIFACT_HUB_API_ENDPOINT}/packages/search"
    params = {AH_TEXT_SEARCH_QUERY_FIELD_NAME: name, **AH_API_SEARCH_PARAMS}
    try:
        response = requests.get(url, params=params, timeout=_TIMEOUT)
    except requests.RequestException as exc:
        raise err_get_ah_package(exc) from exc
    if response.status_code != 200:
        raise err_get_ah_package(
            RuntimeError(f"status code {response.status_code} for {response.url}")
        )
    try:
        payload = response.json()
        return [
            AhPackage(name=pkg["name"], repository=pkg["repository"]["name"])
            for pkg in payload.get("packages") or []
        ]
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        raise err_get_ah_package(exc) from exc


def get_all_ah_helm_packages(delay: float = 0.5) -> list[AhPackage]:
    """List every Helm package on ArtifactHub, pausing ``delay`` seconds per package."""
    response = requests.get(AH_HELM_EXPORTER_ENDPOINT, timeout=_TIMEOUT)
    if response.status_code != 200:
        raise err_get_all_helm_packages(
            RuntimeError(f"status code {response.status_code} for {AH_HELM_EXPORTER_ENDPOINT}")
        )
    exported = response.json()

    packages: list[AhPackage] = []
    for entry in exported:
        try:
            name = entry["name"]
            repo = entry["repository"]["name"]
            version = entry["version"]
            repo_url = entry["repository"]["url"]
        except (KeyError, TypeError) as exc:
            raise err_get_all_helm_packages(exc) from exc

        url = f"{ARTIFACT_HUB_API_ENDPOINT}/packages/helm/{repo}/{name}"
        try:
            detail = requests.get(url, timeout=_TIMEOUT)
        except requests.RequestException as exc:
            log.warning("%s", exc)
            continue
        if detail.status_code != 200:
            log.warning("status code %d for %s", detail.status_code, url)
            continue
        try:
            repository = detail.json().get("repository") or {}
        except (ValueError, AttributeError) as exc:
            log.warning("%s", exc)
            continue

        packages.append(
            AhPackage(
                name=name,
                version=version,
                repository=repo,
                repo_url=repo_url,
                verified_publisher=bool(repository.get("verified_publisher") or False),
                cncf=bool(repository.get("cncf") or False),
                official=bool(repository.get("official") or False),
            )
        )
        time.sleep(delay)
    return packages