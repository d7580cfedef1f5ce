"""Load the demo conference catalog into the configured database."""
from __future__ import annotations

import argparse
import logging

from gridway.core.errors import ConflictError
from gridway.core.logging import configure_logging
from gridway.db.session import SessionLocal, create_tables
from gridway.domain import AttendeeItem, EventItem
from gridway.repositories import SqlRepositories
from gridway.services import CatalogService

logger = logging.getLogger(__name__)

DEMO_EVENTS: tuple[EventItem, ...] = (
    EventItem(
        id="evt1",
        name="Quantum Leap Keynote",
        location="Grand Auditorium, L5, Nexus Tower",
        time_label="Dec 15, 09:00",
        day=15,
        tags=("Keynote", "Quantum"),
        recommended=True,
    ),
    EventItem(
        id="evt2",
        name="AI Ethics & Governance Panel",
        location="Hall of Wisdom, L3",
        time_label="Dec 15, 14:00",
        day=15,
        tags=("AI", "Ethics", "Panel"),
        recommended=True,
    ),
    EventItem(
        id="evt3",
        name="Executive Networking Mixer",
        location="Zenith Lounge, Rooftop",
        time_label="Dec 16, 18:00",
        day=16,
        tags=("Networking",),
        recommended=True,
    ),
    EventItem(
        id="evt4",
        name="Future of Biotech Startup Pitches",
        location="Innovation Labs, L2",
        time_label="Dec 17, 11:00",
        day=17,
        tags=("Biotech", "Startups", "Investment"),
        recommended=True,
    ),
    EventItem(
        id="evt5",
        name="Digital Art & AI Exhibition",
        location="Cultural Atrium, L1",
        time_label="Dec 16, 10:00-18:00",
        day=16,
        tags=("Art", "Social"),
    ),
    EventItem(
        id="evt6",
        name="Intro to Spatial Computing Workshop",
        location="Synthesis Pods, L4",
        time_label="Dec 15, 16:00",
        day=15,
        tags=("Workshop", "Spatial"),
    ),
    EventItem(
        id="evt7",
        name="The Sentient City: Tech Demo",
        location="Data Stream Expo, L1",
        time_label="Dec 17, 15:00",
        day=17,
        tags=("Demo", "Smart Cities"),
    ),
)

DEMO_ATTENDEES: tuple[AttendeeItem, ...] = (
    AttendeeItem(
        id="att1",
        name="Dr. Elara Vance",
        role="CSO, Chronos Labs",
        bio="Temporal data analysis, predictive modeling.",
        tags=("#PredictiveAnalytics", "#DeepTech"),
        recommended=True,
    ),
    AttendeeItem(
        id="att2",
        name="Julian Thorne",
        role="Venture Partner, Aurora Ventures",
        bio="Investing in early-stage AI/sustainable energy.",
        tags=("#VentureCapital", "#ImpactInvesting"),
        recommended=True,
    ),
    AttendeeItem(
        id="att3",
        name="Lena Petrova",
        role="Lead Data Ethicist, Global AI Council",
        bio="Policy for responsible AI.",
        tags=("#AIEthics", "#Policy"),
        recommended=True,
    ),
    AttendeeItem(
        id="att4",
        name="Marcus Chen",
        role="CEO, Synapse Robotics",
        bio="Autonomous systems for industrial environments.",
        tags=("#Robotics", "#Automation"),
        recommended=True,
    ),
    AttendeeItem(
        id="att5",
        name="Anya Sharma",
        role="Product Architect, OmniCorp",
        bio="UI for enterprise quantum computing.",
        tags=("#QuantumUI", "#ProductStrategy"),
        recommended=True,
    ),
    AttendeeItem(
        id="att6",
        name="Kenji Tanaka",
        role="Founder, NeuroForge",
        bio="Brain-computer interface tech.",
        tags=("#BCI", "#NeuroTech"),
        recommended=True,
    ),
    AttendeeItem(
        id="att7",
        name="Isabella Rossi",
        role="Head of Innovation, NeoBank Digital",
        bio="Digital transformation, blockchain in fintech.",
        tags=("#Fintech", "#Blockchain"),
    ),
    AttendeeItem(
        id="att8",
        name="David Lee",
        role="Quantum Computing Engineer, Aperture Labs",
        bio="Superconducting qubit design.",
        tags=("#QuantumHardware", "#Physics"),
        recommended=True,
    ),
)


def seed_catalog(catalog: CatalogService) -> tuple[int, int]:
    """Insert demo events (skipping existing ids) and upsert the demo roster.

    Returns:
        Number of events created and attendees imported
    """
    created = 0
    for event in DEMO_EVENTS:
        try:
            catalog.create_event(event)
        except ConflictError:
            logger.info("Event %s already present; skipping", event.id)
            continue
        created += 1
    attendees = catalog.import_attendees(DEMO_ATTENDEES)
    return created, len(attendees)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the demo conference catalog")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()
    if args.create_tables:
        create_tables()

    db = SessionLocal()
    try:
        created, imported = seed_catalog(CatalogService(SqlRepositories(db)))
    finally:
        db.close()
    logger.info("Seeded %d events and %d attendees", created, imported)


if __name__ == "__main__":
    main()
