"""Skill name normalization and set matching.

Reconciles free-text variants so that "Node", "NodeJS", "node.js" and
"node js" all compare equal. Unknown skills normalize to their cleaned text,
which only matches itself (or a token containing it).

Both tables are built once at import and exposed read-only, so concurrent
evaluations share them without locking.
"""

import re
from types import MappingProxyType

from models.schemas.scoring_result import round_half_up
from models.schemas.skill_match import SkillMatchDetail, SkillMatchResult

# ---------------------------------------------------------------------------
# Canonical key -> known variants (all lower-case, already "cleaned")
# When a variant appears under two keys the later key wins in the reverse map.
# ---------------------------------------------------------------------------
_ALIASES: dict[str, tuple[str, ...]] = {
    # JavaScript ecosystem
    "javascript": ("javascript", "js", "ecmascript", "es6", "es7", "es2015", "es2016", "es2017",
                   "es2018", "es2019", "es2020", "es2021", "es2022", "es2023", "vanilla js",
                   "vanilla javascript"),
    "typescript": ("typescript", "ts", "type script"),
    "nodejs": ("nodejs", "node.js", "node", "node js"),
    "express": ("express", "expressjs", "express.js", "express js"),
    "react": ("react", "reactjs", "react.js", "react js"),
    "vue": ("vue", "vuejs", "vue.js", "vue js", "vue 2", "vue 3", "vue2", "vue3"),
    "angular": ("angular", "angularjs", "angular.js", "angular js", "angular 2", "angular2", "ng"),
    "nextjs": ("nextjs", "next.js", "next", "next js"),
    "nuxt": ("nuxt", "nuxtjs", "nuxt.js", "nuxt js"),
    "svelte": ("svelte", "sveltejs", "svelte.js", "sveltekit"),
    "jquery": ("jquery", "j query", "jq"),
    "deno": ("deno", "denojs", "deno.js"),
    "bun": ("bun", "bunjs", "bun.js"),

    # Databases
    "mongodb": ("mongodb", "mongo db", "mongo", "mongoose", "mongodb atlas", "atlas"),
    "mysql": ("mysql", "my sql", "mariadb", "maria db"),
    "postgresql": ("postgresql", "postgres", "psql", "pg", "postgre sql", "postgres sql"),
    "redis": ("redis", "redis db", "redisdb"),
    "sqlite": ("sqlite", "sqlite3", "sq lite"),
    "oracle": ("oracle", "oracle db", "oracledb", "plsql", "pl/sql"),
    "mssql": ("mssql", "sql server", "sqlserver", "microsoft sql", "ms sql"),
    "dynamodb": ("dynamodb", "dynamo db", "dynamo", "aws dynamodb"),
    "cassandra": ("cassandra", "apache cassandra"),
    "elasticsearch": ("elasticsearch", "elastic search", "elastic", "es", "opensearch"),
    "firebase": ("firebase", "firestore", "firebase db", "firebase firestore"),
    "supabase": ("supabase", "supa base"),

    # Cloud & DevOps
    "aws": ("aws", "amazon web services", "amazon aws", "ec2", "s3", "cloudformation"),
    "azure": ("azure", "microsoft azure", "ms azure", "azure devops"),
    "gcp": ("gcp", "google cloud", "google cloud platform", "gcloud"),
    "docker": ("docker", "dockerfile", "docker compose", "dockercompose", "containerization"),
    "kubernetes": ("kubernetes", "k8s", "kube", "kubectl", "k8", "openshift"),
    "terraform": ("terraform", "hashicorp terraform"),
    "ansible": ("ansible", "ansible playbook"),
    "jenkins": ("jenkins", "jenkins ci", "jenkinsfile"),
    "circleci": ("circleci", "circle ci", "circle"),
    "github-actions": ("github actions", "githubactions", "gh actions", "gha"),
    "gitlab-ci": ("gitlab ci", "gitlabci", "gitlab ci/cd"),
    "nginx": ("nginx", "nginix", "ng inx"),
    "apache": ("apache", "apache2", "httpd", "apache http"),

    # Programming languages
    "python": ("python", "py", "python3", "python 3", "python2", "python 2"),
    "java": ("java", "java se", "java ee", "j2ee", "jdk", "jre", "openjdk"),
    "csharp": ("c#", "csharp", "c sharp", ".net", "dotnet", "asp.net", "aspnet"),
    "cpp": ("c++", "cpp", "cplusplus", "c plus plus"),
    "c": ("c", "c language", "clang"),
    "go": ("go", "golang", "go lang"),
    "rust": ("rust", "rustlang", "rust lang"),
    "ruby": ("ruby", "rb", "ruby on rails", "rails", "ror"),
    "php": ("php", "php7", "php8", "php 7", "php 8", "laravel", "symfony"),
    "swift": ("swift", "swiftui", "swift ui"),
    "kotlin": ("kotlin", "kt", "kotlin lang"),
    "scala": ("scala", "scala lang"),
    "r": ("r", "r language", "rlang", "r programming"),
    "matlab": ("matlab", "mat lab", "octave"),
    "perl": ("perl", "perl5", "perl 5"),

    # Python web frameworks
    "django": ("django", "django rest framework", "drf"),
    "flask": ("flask", "flask api"),
    "fastapi": ("fastapi", "fast api"),
    "spring": ("spring", "spring boot", "springboot", "spring framework"),

    # Frontend & CSS
    "html": ("html", "html5", "html 5", "hypertext markup language"),
    "css": ("css", "css3", "css 3", "cascading style sheets"),
    "sass": ("sass", "scss", "sass/scss"),
    "less": ("less", "less css", "lesscss"),
    "tailwindcss": ("tailwind", "tailwindcss", "tailwind css", "tw"),
    "bootstrap": ("bootstrap", "bootstrap 5", "bootstrap5", "bs"),
    "materialui": ("material ui", "materialui", "mui", "material-ui", "material design"),
    "chakraui": ("chakra ui", "chakraui", "chakra-ui", "chakra"),
    "antdesign": ("ant design", "antd", "antdesign", "ant-design"),
    "styledcomponents": ("styled components", "styled-components", "styledcomponents"),

    # Mobile
    "reactnative": ("react native", "reactnative", "react-native", "rn"),
    "flutter": ("flutter", "dart", "flutter dart"),
    "ios": ("ios", "ios development", "iphone", "ipad", "ipados"),
    "android": ("android", "android development", "android studio"),
    "xamarin": ("xamarin", "xamarin forms", "xamarin.forms"),
    "ionic": ("ionic", "ionic framework", "ionicframework"),

    # AI/ML
    "tensorflow": ("tensorflow", "tensor flow", "tf", "keras"),
    "pytorch": ("pytorch", "py torch", "torch"),
    "machinelearning": ("machine learning", "ml", "machinelearning", "machine-learning"),
    "deeplearning": ("deep learning", "dl", "deeplearning", "deep-learning"),
    "ai": ("ai", "artificial intelligence", "artificial-intelligence"),
    "nlp": ("nlp", "natural language processing", "natural-language-processing"),
    "opencv": ("opencv", "open cv", "cv2"),
    "scikit": ("scikit-learn", "sklearn", "scikit", "scikitlearn"),
    "pandas": ("pandas", "pd"),
    "numpy": ("numpy", "np", "num py"),

    # Testing
    "jest": ("jest", "jestjs", "jest.js"),
    "mocha": ("mocha", "mochajs", "mocha.js"),
    "cypress": ("cypress", "cypress.io", "cypressio"),
    "selenium": ("selenium", "selenium webdriver", "webdriver"),
    "playwright": ("playwright", "play wright"),
    "junit": ("junit", "j unit", "junit5", "junit 5"),
    "pytest": ("pytest", "py test", "py.test"),
    "jasmine": ("jasmine", "jasminejs"),
    "karma": ("karma", "karma runner"),
    "postman": ("postman", "postman api"),

    # Tools & version control
    "git": ("git", "github", "gitlab", "bitbucket", "version control"),
    "svn": ("svn", "subversion", "apache subversion"),
    "npm": ("npm", "npmjs", "node package manager"),
    "yarn": ("yarn", "yarnpkg"),
    "pnpm": ("pnpm",),
    "webpack": ("webpack", "web pack"),
    "vite": ("vite", "vitejs", "vite.js"),
    "babel": ("babel", "babeljs", "babel.js"),
    "eslint": ("eslint", "es lint"),
    "prettier": ("prettier", "prettierrc"),
    "jira": ("jira", "atlassian jira"),
    "figma": ("figma", "figma design"),

    # API & architecture
    "rest": ("rest", "restful", "rest api", "restapi", "rest-api", "restful api"),
    "graphql": ("graphql", "graph ql", "gql", "apollo"),
    "grpc": ("grpc", "g rpc", "grpc-web"),
    "websocket": ("websocket", "websockets", "ws", "socket.io", "socketio"),
    "microservices": ("microservices", "micro services", "microservice", "micro-services"),
    "serverless": ("serverless", "server less", "faas", "lambda", "aws lambda"),
    "oauth": ("oauth", "oauth2", "oauth 2", "oauth2.0"),
    "jwt": ("jwt", "json web token", "json-web-token"),

    # Data & analytics
    "sql": ("sql", "structured query language"),
    "nosql": ("nosql", "no sql", "non-relational"),
    "bigdata": ("big data", "bigdata", "big-data"),
    "hadoop": ("hadoop", "apache hadoop", "hdfs"),
    "spark": ("spark", "apache spark", "pyspark"),
    "kafka": ("kafka", "apache kafka"),
    "tableau": ("tableau", "tableau desktop"),
    "powerbi": ("power bi", "powerbi", "power-bi", "pbi"),
    "excel": ("excel", "ms excel", "microsoft excel", "advanced excel", "spreadsheets"),

    # Business tooling
    "salesforce": ("salesforce", "sfdc", "salesforce crm"),
    "powerpoint": ("powerpoint", "ms powerpoint", "microsoft powerpoint", "ppt"),

    # Other
    "agile": ("agile", "scrum", "kanban", "agile methodology"),
    "linux": ("linux", "ubuntu", "centos", "debian", "redhat", "rhel", "fedora"),
    "unix": ("unix", "unix/linux", "bash", "shell", "shell scripting"),
    "windows": ("windows", "windows server", "powershell"),
    "macos": ("macos", "mac os", "osx", "os x"),
}

SKILL_ALIASES = MappingProxyType(_ALIASES)

# variant -> canonical key; later keys win on collisions
SKILL_TO_CANONICAL = MappingProxyType({
    alias: canonical
    for canonical, aliases in _ALIASES.items()
    for alias in aliases
})

_STRIP_PATTERN = re.compile(r"[^a-z0-9\s.+#]")
_SPACE_PATTERN = re.compile(r"\s+")


def _clean(skill: str) -> str:
    """Lower-case, drop punctuation other than . + #, collapse whitespace."""
    cleaned = _STRIP_PATTERN.sub("", (skill or "").lower().strip())
    return _SPACE_PATTERN.sub(" ", cleaned).strip()


def normalize(skill: str) -> str:
    """Map a free-text skill to its canonical key, or its cleaned form if unknown."""
    cleaned = _clean(skill)

    if cleaned in SKILL_TO_CANONICAL:
        return SKILL_TO_CANONICAL[cleaned]

    # "Node . JS" / "react js" style spellings
    compact = cleaned.replace(".", "").replace(" ", "")
    if compact in SKILL_TO_CANONICAL:
        return SKILL_TO_CANONICAL[compact]

    if cleaned.endswith(".js"):
        stem = cleaned[:-3].strip()
        if stem in SKILL_TO_CANONICAL:
            return SKILL_TO_CANONICAL[stem]

    if cleaned.endswith("js"):
        stem = cleaned[:-2].strip().rstrip(".").strip()
        if stem in SKILL_TO_CANONICAL:
            return SKILL_TO_CANONICAL[stem]

    return cleaned


def normalize_skills(skills: list[str]) -> list[str]:
    """Normalize a list, dropping duplicates and blanks while keeping order."""
    seen: dict[str, None] = {}
    for skill in skills:
        norm = normalize(skill)
        if norm:
            seen.setdefault(norm, None)
    return list(seen)


def match(a: str, b: str) -> bool:
    """True when two skill strings refer to the same technology."""
    norm_a = normalize(a)
    norm_b = normalize(b)
    if not norm_a or not norm_b:
        return False

    if norm_a == norm_b:
        return True

    # Partial match, e.g. "python" vs "python scripting"
    if norm_a in norm_b or norm_b in norm_a:
        return True

    canonical_a = SKILL_TO_CANONICAL.get(norm_a)
    canonical_b = SKILL_TO_CANONICAL.get(norm_b)
    return canonical_a is not None and canonical_a == canonical_b


def match_set(required: list[str], candidate: list[str]) -> SkillMatchResult:
    """Score how many required skills the candidate list covers (0-100)."""
    if not required:
        return SkillMatchResult(score=100)

    if not candidate:
        return SkillMatchResult(
            score=0,
            missing=list(required),
            details=[
                SkillMatchDetail(required_skill=s, canonical=normalize(s)) for s in required
            ],
        )

    matched: list[str] = []
    missing: list[str] = []
    details: list[SkillMatchDetail] = []

    for required_skill in required:
        hit = next((c for c in candidate if match(required_skill, c)), None)
        if hit is not None:
            matched.append(required_skill)
        else:
            missing.append(required_skill)
        details.append(SkillMatchDetail(
            required_skill=required_skill,
            matched=hit is not None,
            matched_with=hit or "",
            canonical=normalize(required_skill),
        ))

    score = round_half_up(100 * len(matched) / len(required))
    return SkillMatchResult(score=score, matched=matched, missing=missing, details=details)


def canonical_skill(skill: str) -> str | None:
    """Canonical key for a known skill, None for unrecognized input."""
    norm = normalize(skill)
    return norm if norm in SKILL_ALIASES else SKILL_TO_CANONICAL.get(norm)


def skill_aliases(skill: str) -> list[str]:
    """All known spellings of a skill; the input itself when unknown."""
    canonical = canonical_skill(skill)
    if canonical is None:
        return [skill]
    return list(SKILL_ALIASES[canonical])


def suggest_similar_skills(skill: str, limit: int = 5) -> list[str]:
    """Canonical keys that contain, or are contained in, the normalized input."""
    norm = normalize(skill)
    if not norm:
        return []
    suggestions = [
        canonical for canonical in SKILL_ALIASES
        if norm in canonical or canonical in norm
    ]
    return suggestions[:limit]
