"""Hand-authored essays published alongside the generated newsletters."""
from typing import List

from ..models.publication import PublicationRecord, SponsorInfo
from .catalog import StaticContentProvider

AUTHOR_NAME = "Infinite Runway"
AUTHOR_IMAGE = "/images/authors/infinite-runway.png"
OPENAI_LOGO = "/images/logos/startups/OpenAI.svg"

AI_MIRROR = PublicationRecord(
    title="AI Mirror",
    description="1 idea, 2 resources, and 3 tools for this week.",
    image_url="/images/thumbnail.svg",
    slug="ai-mirror",
    author_name=AUTHOR_NAME,
    author_image_url=AUTHOR_IMAGE,
    publish_date="December 10, 2023",
    sponsor_info=SponsorInfo(
        name="OpenAI",
        logo=OPENAI_LOGO,
        link="https://openai.com",
        description="Generate images from plain-language prompts with DALL·E 3.",
        cta_text="Start Creating with DALL·E",
        cta_link="https://openai.com/dall-e-3",
    ),
    tags=["ideas", "ethics", "tools"],
    content="""
    <h2>PONDER THIS</h2>
    <blockquote>"AI is a mirror, reflecting not only our intellect but our values &amp; fears." —Ravi Narayanan</blockquote>
    <p>Comparing AI to a mirror implies that these systems reflect the biases, values and fears of the people who build and wield them.</p>
    <p>Building AI is therefore a moral exercise as much as a technical one. If AI reflects our values, we have to examine what we put into it.</p>
    <h2>LEARN</h2>
    <p>[Read] Create custom versions of ChatGPT with GPTs and Zapier to build assistants that reach thousands of apps.</p>
    <p>[Watch] A conversation of experiments with Gemini.</p>
    <h2>TRY IT</h2>
    <p>Three tools we leaned on this week, from research assistants to slide generators.</p>
    """,
)

CONVERGENCE = PublicationRecord(
    title="Convergence",
    description="Why the future isn't just fast, it's exponential.",
    image_url="/images/convergence.svg",
    slug="convergence",
    author_name=AUTHOR_NAME,
    author_image_url=AUTHOR_IMAGE,
    publish_date="December 3, 2023",
    featured=True,
    sponsor_info=SponsorInfo(
        name="OpenAI",
        logo=OPENAI_LOGO,
        link="https://openai.com",
        description="GPT-4 combines linguistic understanding, reasoning and knowledge in a single system.",
        cta_text="Try ChatGPT Today",
        cta_link="https://chat.openai.com/",
    ),
    tags=["ideas", "exponential-technology"],
    content="""
    <blockquote>"It's not one thing that's going to change the world, it's a dozen things, all converging at once."<br>Peter Diamandis &amp; Steven Kotler</blockquote>
    <h2>The Big Idea</h2>
    <p>We tend to think of innovation as a series of single breakthroughs. What actually accelerates the future is convergence: exponential technologies colliding and amplifying one another.</p>
    <h2>Why Convergence Matters</h2>
    <p>AI + Robotics + Sensors = Autonomous Drones<br>
    AI + Genomics + CRISPR = Personalized Medicine<br>
    Blockchain + IoT + Smart Contracts = Decentralized Supply Chains</p>
    <h2>The Human Problem</h2>
    <p>Our intuitions are linear. Convergence is combinatorial, and industries get reinvented faster than we expect.</p>
    """,
)

DIGITAL_CONSCIOUSNESS = PublicationRecord(
    title="Digital Consciousness",
    description="1 idea, 2 resources, and 3 tools for this week.",
    image_url="/images/thumbnail.svg",
    slug="digital-consciousness",
    author_name=AUTHOR_NAME,
    author_image_url=AUTHOR_IMAGE,
    publish_date="November 26, 2023",
    sponsor_info=SponsorInfo(
        name="OpenAI",
        logo=OPENAI_LOGO,
        link="https://openai.com",
        description="OpenAI is pushing the boundaries of what machines can understand and perceive.",
        cta_text="Explore OpenAI Models",
        cta_link="https://openai.com/research",
    ),
    tags=["ideas"],
    content="""
    <h2>What would it mean for a machine to be aware?</h2>
    <p>Notes on consciousness, simulation and the systems we are building.</p>
    """,
)

STATIC_ESSAYS: List[PublicationRecord] = [AI_MIRROR, CONVERGENCE, DIGITAL_CONSCIOUSNESS]


def essay_provider() -> StaticContentProvider:
    return StaticContentProvider(STATIC_ESSAYS)
