"""seed_communities

Revision ID: a7e24d5c91b3
Revises: 3f1c9a2b7d40
Create Date: 2026-10-17 09:30:02.517930

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a7e24d5c91b3"
down_revision: Union[str, Sequence[str], None] = "3f1c9a2b7d40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# (name, slug, description, icon, color)
COMMUNITIES = [
    # Languages and platforms
    (
        "Python",
        "python",
        "Everything Python - from web development to data science, machine learning, and automation scripts.",
        "🐍",
        "#3776ab",
    ),
    (
        "JavaScript",
        "javascript",
        "JavaScript ecosystem - Node.js, React, Vue, Angular, and everything web development.",
        "⚡",
        "#f7df1e",
    ),
    (
        "Linux",
        "linux",
        "Linux distributions, system administration, command line tools, and open source software.",
        "🐧",
        "#fcc624",
    ),
    (
        "Web Development",
        "web-development",
        "Full-stack web development, frameworks, libraries, tools, and best practices.",
        "🌐",
        "#61dafb",
    ),
    (
        "Mobile Development",
        "mobile-development",
        "iOS, Android, React Native, Flutter, and cross-platform mobile app development.",
        "📱",
        "#a4c639",
    ),
    (
        "Cloud Computing",
        "cloud-computing",
        "AWS, Azure, Google Cloud, serverless computing, and cloud architecture patterns.",
        "☁️",
        "#ff9500",
    ),
    (
        "DevOps",
        "devops",
        "CI/CD, infrastructure as code, monitoring, containerization, and deployment automation.",
        "🔧",
        "#607d8b",
    ),
    (
        "Open Source",
        "open-source",
        "Open source projects, contributions, licensing, and community collaboration.",
        "🔓",
        "#4caf50",
    ),
    # Data and AI
    (
        "AI",
        "ai",
        "Artificial Intelligence research, applications, ethics, and future developments.",
        "🤖",
        "#9c27b0",
    ),
    (
        "Machine Learning",
        "machine-learning",
        "ML algorithms, frameworks, datasets, model training, and practical applications.",
        "🧠",
        "#ff5722",
    ),
    (
        "Data Science",
        "data-science",
        "Data analysis, visualization, statistics, big data, and business intelligence.",
        "📊",
        "#2196f3",
    ),
    # Security
    (
        "Cybersecurity",
        "cybersecurity",
        "Information security, threat analysis, security tools, and best practices for staying secure.",
        "🛡️",
        "#ff6b6b",
    ),
    (
        "Reverse Engineering",
        "reverse-engineering",
        "Binary analysis, disassembly, malware research, and software reverse engineering.",
        "🔍",
        "#795548",
    ),
    (
        "Red Team",
        "red-team",
        "Offensive security, penetration testing, exploit development, and attack simulations.",
        "⚔️",
        "#f44336",
    ),
    (
        "Blue Team",
        "blue-team",
        "Defensive security, incident response, threat hunting, and security monitoring.",
        "🛡️",
        "#2196f3",
    ),
    (
        "CTF",
        "ctf",
        "Capture The Flag competitions, challenges, writeups, and cybersecurity contests.",
        "🚩",
        "#ff9800",
    ),
]


def upgrade() -> None:
    """Seed launch communities."""
    communities_table = sa.table(
        "communities",
        sa.column("name", sa.String),
        sa.column("slug", sa.String),
        sa.column("description", sa.String),
        sa.column("icon", sa.String),
        sa.column("color", sa.String),
    )

    op.bulk_insert(
        communities_table,
        [
            {
                "name": name,
                "slug": slug,
                "description": description,
                "icon": icon,
                "color": color,
            }
            for name, slug, description, icon, color in COMMUNITIES
        ],
    )


def downgrade() -> None:
    """Remove seeded communities."""
    slugs = ", ".join(f"'{slug}'" for _, slug, _, _, _ in COMMUNITIES)
    op.execute(f"DELETE FROM communities WHERE slug IN ({slugs})")
