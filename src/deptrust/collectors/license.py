"""License collector: SPDX normalization and risk classification."""

import logging
import re

from deptrust.collectors.base import BaseCollector
from deptrust.collectors.registry import read_license_field
from deptrust.models.schemas import Ecosystem, LicenseData, LicenseRisk

logger = logging.getLogger(__name__)

# SPDX identifier -> risk class
RISK_MAP: dict[str, LicenseRisk] = {
    # Permissive
    "MIT": LicenseRisk.SAFE,
    "ISC": LicenseRisk.SAFE,
    "BSD-2-Clause": LicenseRisk.SAFE,
    "BSD-3-Clause": LicenseRisk.SAFE,
    "Apache-2.0": LicenseRisk.SAFE,
    "Unlicense": LicenseRisk.SAFE,
    "0BSD": LicenseRisk.SAFE,
    "CC0-1.0": LicenseRisk.SAFE,
    "CC-BY-4.0": LicenseRisk.SAFE,
    "Zlib": LicenseRisk.SAFE,
    "BlueOak-1.0.0": LicenseRisk.SAFE,
    "MIT-0": LicenseRisk.SAFE,
    # Weak copyleft
    "LGPL-2.1": LicenseRisk.CAUTIOUS,
    "LGPL-2.1-only": LicenseRisk.CAUTIOUS,
    "LGPL-2.1-or-later": LicenseRisk.CAUTIOUS,
    "LGPL-3.0": LicenseRisk.CAUTIOUS,
    "LGPL-3.0-only": LicenseRisk.CAUTIOUS,
    "LGPL-3.0-or-later": LicenseRisk.CAUTIOUS,
    "MPL-2.0": LicenseRisk.CAUTIOUS,
    "EPL-2.0": LicenseRisk.CAUTIOUS,
    "EPL-1.0": LicenseRisk.CAUTIOUS,
    "CDDL-1.0": LicenseRisk.CAUTIOUS,
    "CDDL-1.1": LicenseRisk.CAUTIOUS,
    # Strong copyleft
    "GPL-2.0": LicenseRisk.RISKY,
    "GPL-2.0-only": LicenseRisk.RISKY,
    "GPL-2.0-or-later": LicenseRisk.RISKY,
    "GPL-3.0": LicenseRisk.RISKY,
    "GPL-3.0-only": LicenseRisk.RISKY,
    "GPL-3.0-or-later": LicenseRisk.RISKY,
    "AGPL-3.0": LicenseRisk.RISKY,
    "AGPL-3.0-only": LicenseRisk.RISKY,
    "AGPL-3.0-or-later": LicenseRisk.RISKY,
    "SSPL-1.0": LicenseRisk.RISKY,
    "EUPL-1.2": LicenseRisk.RISKY,
}

OSI_APPROVED = frozenset({
    "MIT", "ISC", "BSD-2-Clause", "BSD-3-Clause", "Apache-2.0",
    "0BSD", "Unlicense",
    "LGPL-2.1", "LGPL-2.1-only", "LGPL-2.1-or-later",
    "LGPL-3.0", "LGPL-3.0-only", "LGPL-3.0-or-later",
    "MPL-2.0", "EPL-2.0", "EPL-1.0",
    "GPL-2.0", "GPL-2.0-only", "GPL-2.0-or-later",
    "GPL-3.0", "GPL-3.0-only", "GPL-3.0-or-later",
    "AGPL-3.0", "AGPL-3.0-only", "AGPL-3.0-or-later",
    "CDDL-1.0", "Artistic-2.0", "Zlib", "PostgreSQL",
    "EUPL-1.2", "ECL-2.0",
})  # fmt: skip

# Lowercased free-form license strings -> SPDX identifier
LICENSE_ALIASES = {
    "apache 2.0": "Apache-2.0",
    "apache2": "Apache-2.0",
    "apache-2": "Apache-2.0",
    "apache license 2.0": "Apache-2.0",
    "bsd": "BSD-2-Clause",
    "bsd-2": "BSD-2-Clause",
    "bsd-3": "BSD-3-Clause",
    "bsd license": "BSD-2-Clause",
    "gpl": "GPL-3.0",
    "gpl-2": "GPL-2.0",
    "gpl-3": "GPL-3.0",
    "gplv2": "GPL-2.0",
    "gplv3": "GPL-3.0",
    "lgpl": "LGPL-3.0",
    "lgpl-2": "LGPL-2.1",
    "lgpl-3": "LGPL-3.0",
    "agpl": "AGPL-3.0",
    "agpl-3": "AGPL-3.0",
    "mpl": "MPL-2.0",
    "mpl-2": "MPL-2.0",
    "unlicensed": "Unlicense",
    "public domain": "Unlicense",
    "wtfpl": "WTFPL",
    "cc0": "CC0-1.0",
    "cc0-1.0": "CC0-1.0",
    "artistic-2.0": "Artistic-2.0",
}

# Trove classifier license names -> SPDX identifier
CLASSIFIER_LICENSES = {
    "MIT License": "MIT",
    "ISC License (ISCL)": "ISC",
    "BSD License": "BSD-3-Clause",
    "Apache Software License": "Apache-2.0",
    "Mozilla Public License 2.0 (MPL 2.0)": "MPL-2.0",
    "GNU Lesser General Public License v2 or later (LGPLv2+)": "LGPL-2.1-or-later",
    "GNU Lesser General Public License v3 (LGPLv3)": "LGPL-3.0",
    "GNU Lesser General Public License v3 or later (LGPLv3+)": "LGPL-3.0-or-later",
    "GNU General Public License v2 (GPLv2)": "GPL-2.0",
    "GNU General Public License v2 or later (GPLv2+)": "GPL-2.0-or-later",
    "GNU General Public License v3 (GPLv3)": "GPL-3.0",
    "GNU General Public License v3 or later (GPLv3+)": "GPL-3.0-or-later",
    "GNU Affero General Public License v3": "AGPL-3.0",
    "GNU Affero General Public License v3 or later (AGPLv3+)": "AGPL-3.0-or-later",
    "Eclipse Public License 2.0 (EPL-2.0)": "EPL-2.0",
    "The Unlicense (Unlicense)": "Unlicense",
    "zlib/libpng License": "Zlib",
}

_EXPRESSION_SPLIT = re.compile(r"\s+(?:OR|AND)\s+", re.IGNORECASE)


class LicenseCollector(BaseCollector[LicenseData]):
    """Determines a package's license and classifies its risk.

    Risk classes:
    - safe: permissive licenses (MIT, ISC, BSD, Apache-2.0, ...)
    - cautious: weak copyleft (LGPL, MPL, EPL)
    - risky: strong copyleft (GPL, AGPL)
    - unknown: unrecognized or missing
    """

    name = "license"
    data_model = LicenseData

    async def _collect(self, package_name: str, version: str) -> LicenseData:
        document = await self._fetch_registry_document(package_name)
        if self.ecosystem == Ecosystem.PYPI:
            raw = pypi_license(document)
        else:
            raw = npm_license(document, version)

        spdx = to_spdx(raw)
        return LicenseData(
            package_name=package_name,
            version=version,
            raw=raw,
            spdx=spdx,
            risk=classify_risk(spdx),
            osi_approved=spdx is not None and spdx in OSI_APPROVED,
        )


def npm_license(packument: dict, version: str) -> str | None:
    """License of an npm version, falling back to the top-level field."""
    versions = packument.get("versions") or {}
    if version not in versions:
        version = (packument.get("dist-tags") or {}).get("latest", version)

    version_license = read_license_field((versions.get(version) or {}).get("license"))
    if version_license:
        return version_license
    return read_license_field(packument.get("license"))


def pypi_license(document: dict) -> str | None:
    """License from PyPI metadata, falling back to ``License ::`` classifiers."""
    info = document.get("info") or {}
    declared = info.get("license_expression") or info.get("license")
    # Some projects paste the whole license text here
    if isinstance(declared, str) and declared.strip() and "\n" not in declared.strip():
        return declared.strip()

    for classifier in info.get("classifiers") or []:
        if not classifier.startswith("License :: "):
            continue
        name = classifier.split(" :: ")[-1]
        if name in CLASSIFIER_LICENSES:
            return CLASSIFIER_LICENSES[name]
    return None


def to_spdx(raw: str | None) -> str | None:
    """Normalize a raw license string to an SPDX identifier.

    Handles common aliases, case-insensitive matching and SPDX expressions
    such as ``(MIT OR Apache-2.0)``, where the first recognized identifier
    wins. Unrecognized values are returned trimmed.

    Args:
        raw: License string as declared by the package.

    Returns:
        SPDX identifier, or None if nothing was declared.
    """
    if not raw:
        return None
    trimmed = raw.strip()
    if not trimmed:
        return None

    if trimmed in RISK_MAP or trimmed in OSI_APPROVED:
        return trimmed

    alias = LICENSE_ALIASES.get(trimmed.lower())
    if alias:
        return alias

    for part in _EXPRESSION_SPLIT.split(re.sub(r"[()]", "", trimmed)):
        part = part.strip()
        if part in RISK_MAP:
            return part
        alias = LICENSE_ALIASES.get(part.lower())
        if alias:
            return alias

    return trimmed


def classify_risk(spdx: str | None) -> LicenseRisk:
    if not spdx:
        return LicenseRisk.UNKNOWN
    return RISK_MAP.get(spdx, LicenseRisk.UNKNOWN)
