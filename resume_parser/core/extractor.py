"""
Entity Extractor - Recovers contact details and skills from resume text.

All extractors are best-effort: a missing field is returned as None (or an
empty list), never raised.
"""

from typing import Optional
import logging
import re


EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b", re.ASCII)

# Used to reject contact lines when guessing the candidate's name
PHONE_LINE_PATTERN = re.compile(
    r"(?:\+?1[-.\s]?)?(?:\(?[0-9]{3}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4}"
    r"|\([0-9]{3}\)\s[0-9]{3}-[0-9]{4})"
)

NAME_PATTERN = re.compile(r"[A-Za-z\s.,'-]+")

# Tried in order, most specific first. The first pattern with any match wins.
PHONE_PATTERNS = [
    # Label followed by digit groups, as pdf text extraction often yields them
    re.compile(r"phone[:\s]*([0-9]{3})\s+([0-9]{7})", re.IGNORECASE),
    re.compile(r"phone[:\s]*([0-9]{3})\s+([0-9]{3})\s*([0-9]{4})", re.IGNORECASE),
    re.compile(r"phone[:\s]*([0-9]{3})\s+([0-9]{4})", re.IGNORECASE),
    # Bare space separated digit groups
    re.compile(r"\b([0-9]{3})\s+([0-9]{7})\b"),
    re.compile(r"\b([0-9]{3})\s+([0-9]{3})\s*([0-9]{4})\b"),
    re.compile(r"\b([0-9]{3})\s+([0-9]{4})\b"),
    # Standard formats
    re.compile(r"(?:\+?1[-.\s]?)?\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})\b"),
    re.compile(r"\([0-9]{3}\)\s[0-9]{3}-[0-9]{4}"),
    re.compile(r"[0-9]{3}[-.\s][0-9]{3}[-.\s][0-9]{4}"),
    re.compile(r"\+1\s\([0-9]{3}\)\s[0-9]{3}-[0-9]{4}"),
    # Other labels
    re.compile(r"phone[:\s]*\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})", re.IGNORECASE),
    re.compile(r"tel[:\s]*\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})", re.IGNORECASE),
    re.compile(r"mobile[:\s]*\(?([0-9]{3})\)?[-.\s]?([0-9]{3})[-.\s]?([0-9]{4})", re.IGNORECASE),
    # Very broad
    re.compile(r"\b\(?[0-9]{3}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4}\b"),
]

CONTACT_LABELS = ("Location", "Email", "Address", "LinkedIn", "Website", "GitHub")

PHONE_LABEL_PATTERN = re.compile(r"Phone:.*?(?=" + "|".join(CONTACT_LABELS) + r"|$)")

_CONTROL_CHARS = re.compile(r"[\u0000-\u001F\u007F-\u009F]")
_UNICODE_SPACES = re.compile(r"[\u2000-\u206F]")
_PRIVATE_USE = re.compile(r"[\uE000-\uF8FF]")
_WHITESPACE = re.compile(r"\s+")
_NON_DIGITS = re.compile(r"\D")


def clean_text(text: str) -> str:
    """Normalize text pulled out of PDFs before phone matching."""
    text = _CONTROL_CHARS.sub("", text)
    text = _UNICODE_SPACES.sub(" ", text)
    text = text.replace("\ufeff", "")
    text = _PRIVATE_USE.sub("", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


def _format_digits(digits: str) -> Optional[str]:
    if len(digits) == 10:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    if len(digits) == 11 and digits[0] == "1":
        return f"+1 ({digits[1:4]}) {digits[4:7]}-{digits[7:]}"
    return None


def format_phone(raw: str) -> str:
    """Format a matched phone number by digit count, else return it trimmed."""
    formatted = _format_digits(_NON_DIGITS.sub("", raw))
    return formatted if formatted else raw.strip()


def _skill_pattern(skill: str) -> re.Pattern:
    # An alphanumeric edge must not continue a longer token ("C" in "Cloud")
    pattern = re.escape(skill)
    if skill[0].isalnum():
        pattern = r"(?<![A-Za-z0-9])" + pattern
    if skill[-1].isalnum():
        pattern += r"(?![A-Za-z0-9])"
    return re.compile(pattern, re.IGNORECASE)


class EntityExtractor:
    """Extracts name, email, phone and skills from decoded resume text."""

    # Reference vocabulary. Order matters: extracted skills follow it.
    SKILL_CATEGORIES = {
        "programming_languages": [
            "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "C", "PHP", "Ruby", "Go",
            "Rust", "Swift", "Kotlin", "Scala", "R", "MATLAB", "Perl", "Objective-C", "Dart", "Lua",
            "Shell", "Bash", "PowerShell", "SQL", "PL/SQL", "T-SQL", "VB.NET", "F#", "Clojure", "Elixir",
        ],
        "frontend": [
            "React", "React Native", "Vue", "Vue.js", "Angular", "AngularJS", "Svelte", "Next.js",
            "Nuxt.js", "Gatsby", "Redux", "MobX", "Vuex", "RxJS", "jQuery", "Bootstrap",
            "Tailwind CSS", "Material-UI", "Ant Design", "Chakra UI", "Styled Components", "Sass",
            "SCSS", "Less", "PostCSS", "Webpack", "Vite", "Rollup", "Parcel", "Babel", "HTML",
            "HTML5", "CSS", "CSS3", "WebGL", "Canvas",
        ],
        "backend": [
            "Node.js", "Express", "Express.js", "Fastify", "Koa", "NestJS", "Django", "Flask",
            "FastAPI", "Spring", "Spring Boot", "Ruby on Rails", "Laravel", "Symfony", "ASP.NET",
            ".NET Core", "Gin", "Echo", "Fiber", "Phoenix", "Rails", "Sinatra", "Tornado", "Pyramid",
        ],
        "databases": [
            "MongoDB", "PostgreSQL", "MySQL", "MariaDB", "Oracle", "SQL Server", "SQLite", "Redis",
            "Elasticsearch", "Cassandra", "DynamoDB", "Neo4j", "CouchDB", "Firebase", "Firestore",
            "Supabase", "PlanetScale", "Prisma", "TypeORM", "Sequelize", "Mongoose", "Drizzle",
        ],
        "cloud_devops": [
            "AWS", "Amazon Web Services", "Azure", "Google Cloud", "GCP", "Heroku", "Vercel",
            "Netlify", "DigitalOcean", "Linode", "Docker", "Kubernetes", "K8s", "OpenShift",
            "Terraform", "Ansible", "Jenkins", "GitLab CI", "GitHub Actions", "CircleCI",
            "Travis CI", "ArgoCD", "Helm", "Prometheus", "Grafana", "ELK Stack", "Datadog",
            "New Relic", "CloudFormation", "Pulumi",
        ],
        "version_control": [
            "Git", "GitHub", "GitLab", "Bitbucket", "SVN", "Mercurial", "Perforce",
        ],
        "apis": [
            "REST", "REST API", "RESTful", "GraphQL", "gRPC", "WebSocket", "Socket.io", "WebRTC",
            "SOAP", "JSON", "XML", "Protocol Buffers", "Apache Kafka", "RabbitMQ", "Redis Pub/Sub",
            "Apache Pulsar", "MQTT", "ZeroMQ", "ActiveMQ", "AWS SQS", "AWS SNS",
        ],
        "testing": [
            "Jest", "Mocha", "Chai", "Jasmine", "Cypress", "Playwright", "Puppeteer", "Selenium",
            "TestCafe", "Enzyme", "React Testing Library", "PyTest", "unittest", "JUnit", "NUnit",
            "RSpec", "Cucumber", "Postman", "Insomnia", "K6", "JMeter", "LoadRunner",
        ],
        "mobile": [
            "iOS", "Android", "Flutter", "React Native", "Ionic", "Xamarin", "SwiftUI", "UIKit",
            "Jetpack Compose", "Expo", "Capacitor", "NativeScript", "Cordova", "PhoneGap",
        ],
        "data_science": [
            "Machine Learning", "Deep Learning", "Neural Networks", "TensorFlow", "PyTorch",
            "Keras", "Scikit-learn", "Pandas", "NumPy", "Matplotlib", "Seaborn", "Jupyter",
            "Apache Spark", "Hadoop", "Hive", "Presto", "Tableau", "Power BI", "Looker",
            "Metabase", "Superset", "Natural Language Processing", "NLP", "Computer Vision",
            "OpenCV", "CUDA", "MLflow",
        ],
        "methodologies": [
            "Agile", "Scrum", "Kanban", "Waterfall", "DevOps", "CI/CD", "TDD", "BDD", "DDD",
            "Microservices", "Serverless", "Event-Driven", "Domain-Driven Design",
            "Clean Architecture", "SOLID", "Design Patterns", "Refactoring", "Code Review",
            "Pair Programming",
        ],
        "security": [
            "OWASP", "OAuth", "JWT", "SSL/TLS", "Encryption", "Penetration Testing",
            "Security Auditing", "GDPR", "HIPAA", "PCI DSS", "SOC 2", "ISO 27001", "Zero Trust",
            "IAM",
        ],
        "soft_skills": [
            "Leadership", "Team Management", "Project Management", "Communication",
            "Problem Solving", "Critical Thinking", "Collaboration", "Time Management",
            "Mentoring", "Public Speaking", "Technical Writing", "Documentation",
            "Stakeholder Management", "Cross-functional", "Remote Work", "Async Communication",
            "Conflict Resolution", "Negotiation",
        ],
        "tools": [
            "Jira", "Confluence", "Slack", "Microsoft Teams", "Asana", "Trello", "Linear",
            "Notion", "Figma", "Sketch", "Adobe XD", "InVision", "Zeplin", "Storybook",
            "Chromatic", "VS Code", "IntelliJ IDEA", "Visual Studio", "Eclipse", "Xcode",
            "Android Studio", "Postman", "Insomnia", "Charles Proxy", "Wireshark", "Fiddler",
            "ngrok",
        ],
        "business_domains": [
            "FinTech", "EdTech", "HealthTech", "E-commerce", "SaaS", "B2B", "B2C", "Marketplace",
            "Blockchain", "Web3", "DeFi", "NFT", "Cryptocurrency", "Smart Contracts", "Solidity",
            "IoT", "Embedded Systems", "AR/VR", "Game Development", "Unity", "Unreal Engine",
        ],
    }

    SKILL_VOCABULARY = tuple(dict.fromkeys(
        skill for skills in SKILL_CATEGORIES.values() for skill in skills
    ))

    _SKILL_PATTERNS = tuple((skill, _skill_pattern(skill)) for skill in SKILL_VOCABULARY)

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def extract_email(self, text: str) -> Optional[str]:
        """Return the first email address in the text."""
        self._require_text(text)
        match = EMAIL_PATTERN.search(text)
        return match.group(0) if match else None

    def extract_phone(self, text: str) -> Optional[str]:
        """Return the first phone number found, formatted when possible."""
        self._require_text(text)
        cleaned = clean_text(text)

        for index, pattern in enumerate(PHONE_PATTERNS, 1):
            match = pattern.search(cleaned)
            if match is None:
                continue

            raw = match.group(0)
            phone = format_phone(raw)
            self.logger.debug(f"Phone pattern {index} matched {raw!r} -> {phone!r}")
            return phone

        # Last resort: digits on the "Phone:" line only
        label_match = PHONE_LABEL_PATTERN.search(cleaned)
        if label_match:
            digits = _NON_DIGITS.sub("", label_match.group(0))[:11]
            formatted = _format_digits(digits)
            if formatted:
                self.logger.debug(f"Phone recovered from label line: {formatted!r}")
                return formatted

        self.logger.debug("No phone number found")
        return None

    def extract_name(self, text: str) -> Optional[str]:
        """Guess the candidate's name from the first few non-blank lines."""
        self._require_text(text)
        lines = [line.strip() for line in text.split("\n") if line.strip()]

        for line in lines[:5]:
            if EMAIL_PATTERN.search(line) or PHONE_LINE_PATTERN.search(line):
                continue
            if 2 < len(line) < 50 and NAME_PATTERN.fullmatch(line):
                return line

        return None

    def extract_skills(self, text: str) -> list[str]:
        """Return vocabulary skills mentioned in the text, in vocabulary order."""
        self._require_text(text)
        return [skill for skill, pattern in self._SKILL_PATTERNS if pattern.search(text)]

    @staticmethod
    def _require_text(text) -> None:
        if not isinstance(text, str):
            raise TypeError(f"Expected decoded text, got {type(text).__name__}")
