"""Rule tables for the JobFit pipeline.

Every classifier in the pipeline is an ordered walk over one of these
tables, so extending a category means editing data here rather than control
flow in the stages. All patterns run against ``normalize_text`` output
(lower-cased, whitespace collapsed).
"""

import re

from models.schemas.common import JobFunction

# ---------------------------------------------------------------------------
# Job facts
# ---------------------------------------------------------------------------

HOURLY_EVIDENCE_PATTERNS: list[re.Pattern] = [
    re.compile(r"\$\s*\d+(?:\.\d+)?\s*/\s*(?:hr|hour)\b", re.IGNORECASE),
    re.compile(r"\$\s*\d+(?:\.\d+)?\s+(?:per|an|a)\s+hour\b", re.IGNORECASE),
]
HOURLY_PATTERNS: list[re.Pattern] = HOURLY_EVIDENCE_PATTERNS + [
    re.compile(r"\b(?:per\s+hour|hourly)\b"),
    re.compile(r"\b\d+(?:\.\d+)?\s*/\s*hr\b"),
]

# Contract senses that are about documents, not employment
CONTRACT_NON_EMPLOYMENT_RE = re.compile(
    r"\b(?:draft(?:ing)?|review(?:ing)?|negotiat(?:e|ing|ion)|manag(?:e|ing)|administer(?:ing)?"
    r"|prepar(?:e|ing)|analy[sz](?:e|ing))\s+(?:\w+\s+){0,2}contracts?\b"
    r"|\bcontracts?\s+(?:management|administration|law|review|negotiation|compliance|lifecycle)\b"
    r"|\bgovernment contracts?\b|\bcontract(?:s|ing)?\s+(?:attorney|manager|specialist|analyst)\b",
    re.IGNORECASE,
)
CONTRACT_PATTERNS: list[re.Pattern] = [
    re.compile(r"\bcontract(?:\s+(?:role|position|assignment|basis|to\s+hire|-to-hire))?\b", re.IGNORECASE),
    re.compile(r"\b\d+\s*-?\s*months?\s+(?:contract|assignment|engagement|duration)\b", re.IGNORECASE),
    re.compile(r"\b(?:3|6)\s*-?\s*month\b", re.IGNORECASE),
    re.compile(r"\btemporary\b", re.IGNORECASE),
    re.compile(r"\btemp\b", re.IGNORECASE),
    re.compile(r"\b1099\b", re.IGNORECASE),
]

FULLY_REMOTE_RE = re.compile(r"\b(?:fully remote|100% remote|remote only|remote-only|work from home)\b")
ONSITE_RE = re.compile(
    r"\b(?:on-?site|in[- ]office|in[- ]person)\s+(?:role|position|required|requirement|\d+\s+days)"
    r"|\b(?:must|required to)\s+(?:be\s+)?(?:located|relocate|work\s+on-?site|report\s+to)"
    r"|\brelocation\s+(?:is\s+)?required\b"
)

# ---------------------------------------------------------------------------
# Seniority (first match wins)
# ---------------------------------------------------------------------------

SENIORITY_PATTERNS: list[tuple[str, re.Pattern]] = [
    ("internship", re.compile(r"\b(?:intern|internship|summer analyst|co-op|co op)\b")),
    ("entry", re.compile(r"\b0\s*-?\s*[12]\s+years?\b|\b(?:entry level|entry-level|new grad|graduate program)\b")),
    ("early_career", re.compile(r"\b(?:1\s*-?\s*3|2\s*-?\s*4)\s+years?\b")),
    ("experienced", re.compile(r"\b(?:[3-9]|1\d)\+\s*years?\b|\bminimum\s+(?:of\s+)?(?:[3-9])\s+years?\b")),
]

# ---------------------------------------------------------------------------
# Employer tier
# ---------------------------------------------------------------------------

TIER1_PATTERNS: list[re.Pattern] = [
    re.compile(r"\binvestment banking\b"),
    re.compile(r"\bprivate equity\b"),
    re.compile(r"\bm&a\b"),
    re.compile(r"\bleveraged finance\b"),
    re.compile(r"\blbo\b"),
    re.compile(r"\bmanagement consulting\b"),
    re.compile(r"\bstrategy\s+consult(?:ing|ant)\b"),
    re.compile(
        r"\b(?:goldman|morgan stanley|jpmorgan|j\.p\. morgan|citi|bofa|bank of america"
        r"|barclays|evercore|lazard|centerview)\b"
    ),
    re.compile(r"\b(?:mckinsey|bain|bcg|boston consulting group|deloitte consulting)\b|\bstrategy&"),
]

TIER2_PATTERNS: list[re.Pattern] = [
    re.compile(r"\brotational\b"),
    re.compile(r"\bleadership development\b"),
    re.compile(r"\bformal training\b"),
    re.compile(r"\bnew grad program\b"),
    re.compile(r"\baccelerated development\b"),
]

# ---------------------------------------------------------------------------
# Job function (ordered: first matching category wins)
# ---------------------------------------------------------------------------

JOB_FUNCTION_PATTERNS: list[tuple[JobFunction, re.Pattern]] = [
    ("investment_banking_pe_mna", re.compile(
        r"\b(?:investment banking|private equity|m&a|mergers|acquisitions|lbo|leveraged buyout|capital markets)\b")),
    ("consulting_strategy", re.compile(
        r"\b(?:management consulting|strategy consulting|consultant|case interview|client engagements?)\b")),
    ("commercial_real_estate", re.compile(
        r"\b(?:commercial real estate|cre|multifamily|industrial|office leasing|real estate underwriting"
        r"|dscr|noi|cap rate)\b")),
    ("finance_accounting", re.compile(
        r"\b(?:accounting|accountant|ar|ap|general ledger|reconciliation|financial statements|cpa)\b")),
    ("sales", re.compile(
        r"\b(?:sales|business development|quota|commission|pipeline|lead gen|cold call)\b")),
    ("marketing_analytics", re.compile(
        r"\b(?:marketing analytics|marketing analyst|roas|meta ads|google ads|campaign performance"
        r"|attribution|sql|a/b test)\b")),
    ("brand_marketing", re.compile(
        r"\b(?:brand marketing|brand strategy|brand manager|content marketing|social media"
        r"|creative strategy|communications)\b")),
    ("product_program_ops", re.compile(
        r"\b(?:program manager|project manager|operations|biz ops|business operations"
        r"|process improvement|program management)\b")),
    ("customer_success", re.compile(
        r"\b(?:customer success|client success|implementation|onboarding|account manager)\b")),
    ("government_public", re.compile(
        r"\b(?:government|public sector|municipal|state agency|federal)\b")),
    ("software_data", re.compile(
        r"\b(?:software engineer|developer|full stack|frontend|backend|api|javascript|typescript"
        r"|python|data engineer|machine learning)\b")),
    ("research", re.compile(
        r"\b(?:research|research assistant|lab|publication|literature review|irb)\b")),
    ("clinical_health", re.compile(
        r"\b(?:clinical|patient|medical device|emt|paramedic|nurse|rn|physician|therapy|pt|occupational)\b")),
]

# ---------------------------------------------------------------------------
# Alignment: direct keyword sets and the strong-adjacency table
# ---------------------------------------------------------------------------

DIRECT_KEYWORDS: dict[JobFunction, list[re.Pattern]] = {
    "investment_banking_pe_mna": [re.compile(
        r"\b(?:investment banking|ib|m&a|mergers|acquisitions|lbo|leveraged buyout|pitchbook"
        r"|financial modeling|valuation|dcf)\b")],
    "consulting_strategy": [re.compile(
        r"\b(?:consulting|consultant|case interview|workstream|deck|analysis|client deliverables)\b")],
    "finance_accounting": [re.compile(
        r"\b(?:financial analysis|fp&a|budget|forecast|accounting|reconciliation|general ledger"
        r"|journal entries|ar|ap)\b")],
    "commercial_real_estate": [re.compile(
        r"\b(?:commercial real estate|real estate underwriting|noi|cap rate|dscr|multifamily"
        r"|industrial|office|leasing)\b")],
    "sales": [re.compile(
        r"\b(?:sales|business development|quota|pipeline|crm|lead gen|cold call|outbound|closing)\b")],
    "marketing_analytics": [re.compile(
        r"\b(?:sql|google analytics|roas|attribution|a/b test|performance marketing"
        r"|campaign performance|meta ads|google ads)\b")],
    "brand_marketing": [re.compile(
        r"\b(?:brand|content|social media|creative strategy|communications|copywriting|storytelling)\b")],
    "product_program_ops": [re.compile(
        r"\b(?:program management|project management|operations|process improvement|roadmap"
        r"|requirements|stakeholders?)\b")],
    "customer_success": [re.compile(
        r"\b(?:customer success|client success|onboarding|implementation|account management|retention)\b")],
    "government_public": [re.compile(
        r"\b(?:government|public sector|municipal|state agency|federal)\b")],
    "software_data": [re.compile(
        r"\b(?:software|engineer|developer|typescript|javascript|python|api|database|sql"
        r"|data pipeline|machine learning)\b")],
    "research": [re.compile(
        r"\b(?:research|lab|irb|publication|literature review|data collection|analysis)\b")],
    "clinical_health": [re.compile(
        r"\b(?:emt|patient|clinical|medical device|therapy|rn|hospital)\b")],
    "unknown": [],
}

STRONG_ADJACENCY: dict[JobFunction, list[JobFunction]] = {
    "investment_banking_pe_mna": ["finance_accounting", "commercial_real_estate", "consulting_strategy"],
    "consulting_strategy": ["product_program_ops", "finance_accounting", "marketing_analytics"],
    "finance_accounting": ["investment_banking_pe_mna", "commercial_real_estate", "product_program_ops"],
    "commercial_real_estate": ["finance_accounting", "investment_banking_pe_mna"],
    "sales": ["customer_success", "brand_marketing"],
    "marketing_analytics": ["brand_marketing", "product_program_ops"],
    "brand_marketing": ["marketing_analytics", "customer_success"],
    "product_program_ops": ["consulting_strategy", "marketing_analytics", "finance_accounting"],
    "customer_success": ["sales", "brand_marketing", "product_program_ops"],
    "government_public": [],
    "software_data": ["research"],
    "research": ["software_data", "clinical_health"],
    "clinical_health": ["research"],
    "unknown": [],
}

# Generic signals that earn weak-adjacent alignment when two or more appear
WEAK_SIGNAL_PATTERNS: list[re.Pattern] = [
    re.compile(r"\bprojects?\b"),
    re.compile(r"\bleadership\b"),
    re.compile(r"\banaly(?:sis|ses|tical)\b"),
    re.compile(r"\b(?:intern|interns|internship|internships)\b"),
]

# ---------------------------------------------------------------------------
# Depth indicators: (name, pattern, weight)
# ---------------------------------------------------------------------------

DEPTH_INDICATORS: list[tuple[str, re.Pattern, int]] = [
    ("internship", re.compile(r"\b(?:intern|internship|co-op|co op)\b"), 2),
    ("work_title", re.compile(r"\b(?:analyst|assistant|associate|coordinator|representative|specialist)\b"), 1),
    ("leadership_title", re.compile(r"\b(?:president|vp|vice president|captain|lead|chair|founder)\b"), 1),
    ("projects", re.compile(r"\b(?:project|projects|case competition|capstone)\b"), 1),
    ("research", re.compile(r"\b(?:research|lab|irb|publication)\b"), 1),
    ("academics", re.compile(r"\b(?:major|minor|gpa)\b|\bb\.[sa]\."), 1),
]

SENIORITY_DEPTH_ADJUSTMENT: dict[str, int] = {"experienced": -1, "internship": 1}

DEPTH_STRONG_MIN = 6
DEPTH_MODERATE_MIN = 3

# ---------------------------------------------------------------------------
# Signal labels for bullets (never quotes)
# ---------------------------------------------------------------------------

JOB_SIGNALS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\b(?:financial modeling|valuation|dcf|lbo)\b"), "Financial modeling and valuation"),
    (re.compile(r"\b(?:client|stakeholder|presentation|deck|powerpoint)\b"), "Stakeholder communication and presentations"),
    (re.compile(r"\bexcel\b"), "Heavy Excel execution"),
    (re.compile(r"\bsql\b"), "SQL-based analysis"),
    (re.compile(r"\b(?:google analytics|ga4)\b"), "Web analytics measurement"),
    (re.compile(r"\b(?:meta ads|google ads|paid media|roas)\b"), "Performance marketing execution"),
    (re.compile(r"\b(?:project management|program management|timeline|roadmap)\b"), "Project or program management"),
    (re.compile(r"\b(?:operations|process improvement|workflow)\b"), "Operational execution and process improvement"),
    (re.compile(r"\b(?:research|literature review|irb|lab)\b"), "Research-heavy responsibilities"),
    (re.compile(r"\b(?:cold call|quota|pipeline|crm)\b"), "Outbound sales execution"),
    (re.compile(r"\b(?:und(?:er)?writing|credit memo|loan)\b"), "Underwriting or credit work"),
    (re.compile(r"\b(?:financial statements|balance sheet|income statement|cash flow)\b"), "Financial statement work"),
]
JOB_SIGNAL_LIMIT = 3

PROFILE_SIGNALS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\b(?:underwriting|credit|loan|debt)\b"), "Underwriting or credit exposure"),
    (re.compile(r"\b(?:financial modeling|valuation|dcf|lbo)\b"), "Financial modeling and valuation"),
    (re.compile(r"\bexcel\b"), "Excel execution"),
    (re.compile(r"\b(?:client|stakeholder|presentation|deck|powerpoint)\b"), "Stakeholder communication and presentations"),
    (re.compile(r"\bsql\b"), "SQL-based analysis"),
    (re.compile(r"\b(?:crm|salesforce)\b"), "CRM usage"),
    (re.compile(r"\b(?:research|literature review|irb|lab)\b"), "Research experience"),
    (re.compile(r"\b(?:leadership|president|vp|captain|lead)\b"), "Leadership signals"),
    (re.compile(r"\b(?:project|capstone|case competition)\b"), "Project-based work"),
]
PROFILE_SIGNAL_LIMIT = 4

# ---------------------------------------------------------------------------
# Hard requirements: explicit credentials only.
# Visa/work authorization and driver's licenses are deliberately absent.
# (key, label, pattern) - the same pattern is searched in the profile.
# ---------------------------------------------------------------------------

HARD_REQUIREMENTS: list[tuple[str, str, re.Pattern]] = [
    ("req_series_7", "Series 7 license required", re.compile(r"\bseries\s*7\b")),
    ("req_series_63", "Series 63 license required", re.compile(r"\bseries\s*63\b")),
    ("req_cpa", "CPA required", re.compile(r"\bcpa\b")),
    ("req_pmp", "PMP certification required", re.compile(r"\bpmp\b")),
    ("req_clearance", "Security clearance required", re.compile(r"\b(?:security clearance|ts/sci?|top secret)\b")),
    ("req_rn", "RN license required", re.compile(r"\brn\b")),
    ("req_emt", "EMT certification required", re.compile(r"\bemt\b")),
]

# ---------------------------------------------------------------------------
# Profile constraints: topic keywords the negation templates attach to
# ---------------------------------------------------------------------------

EXCLUSION_TOPICS: dict[str, list[str]] = {
    "hourly": ["hourly", "per hour", "hourly pay"],
    "contract": ["contract", "contracts", "temp", "temporary", "1099"],
    "sales": ["sales", "commission", "commission-based", "commissions"],
    "government": ["government", "governmental", "public sector"],
    "fully_remote": ["fully remote", "100% remote", "remote only", "remote-only"],
}

FULL_TIME_RE = re.compile(r"\b(?:full time|full-time|fulltime)\b|job type preference[^.]*\bfull\b")

# ---------------------------------------------------------------------------
# Targets
# ---------------------------------------------------------------------------

# Phrases looked for in profile prose when no structured target list exists
TARGET_PHRASES: list[str] = [
    "investment banking",
    "private equity",
    "consulting",
    "commercial real estate",
    "marketing",
    "sales",
    "finance",
    "product",
    "operations",
    "customer success",
    "government",
]
TARGET_PHRASE_LIMIT = 12
TARGET_FUNCTION_LIMIT = 12

TARGET_FUNCTION_PATTERNS: list[tuple[JobFunction, re.Pattern]] = [
    ("investment_banking_pe_mna", re.compile(r"\b(?:investment banking|private equity|m&a|ib|pe)\b")),
    ("consulting_strategy", re.compile(r"\b(?:consulting|strategy)\b")),
    ("commercial_real_estate", re.compile(r"\b(?:commercial real estate|real estate)\b")),
    ("finance_accounting", re.compile(r"\b(?:accounting|finance)\b")),
    ("sales", re.compile(r"\b(?:sales|business development)\b")),
    ("marketing_analytics", re.compile(r"\b(?:marketing analytics|analytics|marketing)\b")),
    ("brand_marketing", re.compile(r"\b(?:brand|content|social|marketing)\b")),
    ("product_program_ops", re.compile(r"\b(?:product|program|operations|ops)\b")),
    ("customer_success", re.compile(r"\b(?:customer success|client success)\b")),
    ("government_public", re.compile(r"\b(?:government|public)\b")),
    ("software_data", re.compile(r"\b(?:software|engineering|data)\b")),
    ("research", re.compile(r"\bresearch\b")),
    ("clinical_health", re.compile(r"\b(?:clinical|medical|health)\b")),
]

# ---------------------------------------------------------------------------
# School tier allowlist (used only when no structured tier is supplied)
# ---------------------------------------------------------------------------

SCHOOL_TIERS: list[tuple[str, re.Pattern]] = [
    ("S", re.compile(
        r"\b(?:harvard|yale|princeton|stanford|mit|massachusetts institute of technology|wharton"
        r"|university of pennsylvania|upenn|columbia university|university of chicago|dartmouth)\b")),
    ("A", re.compile(
        r"\b(?:cornell|duke|northwestern|georgetown|brown university|nyu stern|university of michigan"
        r"|ross school of business|uc berkeley|berkeley haas|ucla|university of virginia|notre dame"
        r"|vanderbilt|rice university|carnegie mellon|emory|washington university in st\. louis)\b")),
]

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

MONTHS: dict[str, int] = {
    "jan": 1, "january": 1,
    "feb": 2, "february": 2,
    "mar": 3, "march": 3,
    "apr": 4, "april": 4,
    "may": 5,
    "jun": 6, "june": 6,
    "jul": 7, "july": 7,
    "aug": 8, "august": 8,
    "sep": 9, "sept": 9, "september": 9,
    "oct": 10, "october": 10,
    "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}

MONTH_NAMES: list[str] = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

_MONTH_TOKEN = (
    r"jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?"
)
MONTH_YEAR_RE = re.compile(rf"\b({_MONTH_TOKEN})\b[^\d]{{0,10}}\b(20\d{{2}})\b", re.IGNORECASE)

GRAD_WINDOW_ANCHORS: list[re.Pattern] = [
    re.compile(r"expected graduation between(.{0,140})", re.IGNORECASE),
    re.compile(r"expected to graduate between(.{0,140})", re.IGNORECASE),
    re.compile(r"graduating between(.{0,140})", re.IGNORECASE),
    re.compile(r"expected graduation[:\s]+(.{0,140})", re.IGNORECASE),
]

# The keyword-to-month gap stays inside one sentence and never crosses a year
CANDIDATE_GRAD_PATTERNS: list[re.Pattern] = [
    re.compile(rf"\b(?:graduat\w*|expected|class of)\b[^.;!?\d]{{0,40}}?\b({_MONTH_TOKEN})\b[^\d]{{0,10}}\b(20\d{{2}})\b",
               re.IGNORECASE),
]
CLASS_OF_RE = re.compile(r"\bclass of\s*(20\d{2})\b", re.IGNORECASE)
GRADUATING_YEAR_RE = re.compile(r"\b(?:graduate|graduating|graduation)\b[^\d]{0,20}\b(20\d{2})\b", re.IGNORECASE)
DEFAULT_GRAD_MONTH = 5

# ---------------------------------------------------------------------------
# Risk codes -> user-facing sentences. Codes without a sentence are dropped.
# ---------------------------------------------------------------------------

RISK_LABELS: dict[str, str] = {
    "depth_limited": "Depth is light for what this role expects. If you have more relevant work, it is not showing clearly.",
    "off_target_role": "This is off-target vs your stated direction. Even if you want it, it is not a smart application unless you are pivoting.",
    "weak_alignment": "Alignment is not clearly tied to what this job does. The market will treat that as missing.",
    "strong_adjacent_alignment": "Your background is adjacent, not direct. That can work, but it raises the bar.",
    "tier1_competition": "Tier 1 competition. Expect higher screening and a deeper candidate pool.",
    "tier2_competition": "Tier 2 competition. Still competitive.",
    "pedigree_gap": "For this level of competition, school pedigree can matter. Without a feeder background, you need stronger proof.",
    "gpa_risk_below_3_8": "For Tier 1 competition, GPA below 3.8 can reduce odds depending on employer screening.",
    "gpa_risk_below_3_5": "GPA below 3.5 can reduce odds depending on employer screening.",
    "contract_role": "Contract structure. Make sure that fits your preference and risk tolerance.",
    "hourly_role": "Hourly pay structure. Make sure that fits your preference and trajectory.",
    "fully_remote_role": "Fully remote role. If you prefer in-person or hybrid, treat this as a real tradeoff.",
    "targets_unclear": "Your targets are unclear, so this decision is based purely on visible fit signals.",
}

# Risk text that is never actionable for the candidate
SUPPRESSED_RISK_MARKERS: list[tuple[str, ...]] = [
    ("visa",), ("work authorization",), ("sponsorship",),
    ("authorized to work",), ("employment authorization",),
    ("driver", "license"), ("background check",), ("drug test",),
    ("not stated",), ("not specified",), ("not mentioned",), ("unclear from the job",),
]

RISK_CODE_LIMIT = 10
RISK_FLAG_LIMIT = 6
