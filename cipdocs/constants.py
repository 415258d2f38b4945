
# cipdocs/constants.py
import re

SOURCE_REPO  = "cardano-foundation/CIPs"
RAW_BASE_URL = "https://raw.githubusercontent.com/cardano-foundation/CIPs/master"
REPO_BASE_URL = "https://github.com/cardano-foundation/CIPs/tree/master"
README       = "README.md"

DOCS_DIR   = "docs/governance/cardano-improvement-proposals"
STATIC_DIR = "static/img/cip"

USER_AGENT = "Mozilla/5.0 (CIPDocsBot/1.0)"
TIMEOUT    = 30
CONCURRENCY = 8

# CIP-0001/ as linked from the root README
INDEX_RE    = re.compile(r'CIP-\d{4}/')
# ](./diagram.png) and friends, remote ones are filtered later
RESOURCE_RE = re.compile(r'\]\([^)\s]*?\.(?:png|jpg|jpeg|json)\)', re.IGNORECASE)

H1_KEYWORDS = ("Abstract", "Motivation", "Specification", "Rationale", "Copyright")

# Empty header block some CIPs still carry (CIP-0049)
EMPTY_HEADER = "* License: \n* License-Code:\n* Post-History:\n* Requires:\n* Replaces:\n* Superseded-By:\n"

# Relative references that don't resolve inside the docs tree
LINK_FIXES = {
    "cddl/version-1.cddl": "https://github.com/cardano-foundation/CIPs/blob/master/CIP-0060/cddl/version-1.cddl",
}
