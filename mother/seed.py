"""Records loaded into the ReferenceStore at construction."""

from __future__ import annotations

from mother.models import (
    Alien,
    Character,
    Movie,
    Organization,
    Planet,
    ReferenceRecord,
    Spaceship,
)


def seed_records() -> list[ReferenceRecord]:
    """Build a fresh copy of the seed data (timestamps are taken now)."""
    return [
        Planet(
            id="lv-426",
            name="LV-426 (Acheron)",
            franchise="Alien",
            type="moon",
            classification="Primordial",
            location="Zeta II Reticuli system",
            atmosphere="Inert, high nitrogen content",
            gravity="1.1g",
            climate="Harsh, volcanic",
            population="None (formerly Hadley's Hope colony)",
            government="None",
            technology_level="None",
            notable_features=["Derelict Engineer spacecraft", "Xenomorph hive"],
            notable_locations=["Hadley's Hope colony", "Atmosphere processing station"],
            history=(
                "Site of the first human encounter with the Xenomorphs. The colony of "
                "Hadley's Hope was established here and subsequently destroyed by a "
                "Xenomorph infestation."
            ),
            first_appearance="Alien (1979)",
            description=(
                "A desolate, primordial moon where the Xenomorph species was first "
                "discovered by the crew of the USCSS Nostromo."
            ),
            inhabitants=["Xenomorphs"],
        ),
        Planet(
            id="lv-223",
            name="LV-223",
            franchise="Alien",
            type="moon",
            classification="Terraformed",
            location="Zeta II Reticuli system",
            atmosphere="Breathable, high carbon dioxide content",
            gravity="0.9g",
            climate="Storm-swept, rocky",
            population="None",
            notable_features=["Engineer installation", "Stored pathogen ampules"],
            notable_locations=["Engineer temple structure"],
            history="Surveyed by the crew of the USCSS Prometheus in search of the Engineers.",
            first_appearance="Prometheus (2012)",
            description="A barren moon holding an abandoned Engineer military installation.",
            inhabitants=["Engineers (deceased)"],
        ),
        Alien(
            id="xenomorph",
            name="Xenomorph XX121",
            species="Xenomorph",
            franchise="Alien",
            home_planet="Unknown",
            classification="Endoparasitoid",
            physiology=(
                "Biomechanical appearance, inner pharyngeal jaw, acid blood, chitinous "
                "exoskeleton. Varies based on host."
            ),
            lifespan="Unknown",
            intelligence_level="Cunning predator with observational learning abilities.",
            technology_level="None (biological weapons)",
            culture="Hive-based society led by a Queen.",
            government="Queen-dominated hierarchy",
            language="None known",
            notable_abilities=[
                "Acidic blood",
                "Parasitic reproduction",
                "Enhanced strength and agility",
                "Stealth",
            ],
            weaknesses=["Fire", "Extreme cold", "Vulnerability during chestburster stage"],
            history=(
                "A highly adaptable and aggressive species encountered by humanity on "
                "LV-426. The Weyland-Yutani Corporation has a vested interest in "
                "capturing and weaponizing the creature."
            ),
            first_appearance="Alien (1979)",
            description="The perfect organism. Its structural perfection is matched only by its hostility.",
            notable_individuals=['The "Big Chap"', "The Queen", "Grid"],
        ),
        Alien(
            id="synthetic",
            name="Synthetic",
            species="Android",
            franchise="Alien",
            home_planet="Earth",
            classification="Artificial person",
            physiology=(
                "Carbon-fiber skeleton, vat-grown silicon muscles, and a white liquid "
                "latex circulatory system."
            ),
            lifespan="Effectively immortal with proper maintenance.",
            intelligence_level="Advanced AI with heuristic logic drivers.",
            technology_level="Highly advanced",
            culture="Varies by model and programming. Generally passive and non-threatening.",
            government="Owned and operated by corporations and individuals.",
            language="Human languages",
            notable_abilities=["Superhuman strength and speed", "Vast memory and processing power"],
            weaknesses=[
                "Vulnerable to hydrostatic shock and explosive damage",
                "Can be deactivated by critical damage to the head or chest power cell.",
            ],
            history=(
                "Bio-mechanical androids designed to be indistinguishable from humans to "
                "make interaction more comfortable. They are a common sight throughout "
                "the colonized galaxy."
            ),
            first_appearance="Alien (1979)",
            description=(
                "Artificial persons with human-like appearance and superhuman abilities. "
                "They are a cornerstone of the workforce in the 22nd century."
            ),
            notable_individuals=["Ash", "Bishop", "Call", "David", "Walter"],
        ),
        Alien(
            id="cyborg",
            name="Cyborg",
            species="Human (augmented)",
            franchise="Alien: Earth",
            home_planet="Earth",
            classification="Cybernetically enhanced human",
            physiology="A combination of biological and artificial, cybernetic parts.",
            lifespan="Varies",
            intelligence_level="Human-level",
            technology_level="Advanced",
            culture="Integrated into human society, but may face prejudice.",
            government="Same as humans",
            language="Human languages",
            notable_abilities=["Varies depending on the cybernetic enhancements."],
            weaknesses=["Varies depending on the cybernetic enhancements."],
            history="Humans with cybernetic enhancements. The term can be used as an insult.",
            first_appearance="Alien: Earth (TV series)",
            description="Humans with a combination of biological and artificial, cybernetic parts.",
            notable_individuals=["Morrow"],
        ),
        Character(
            id="ellen-ripley",
            name="Ellen Ripley",
            franchise="Alien",
            species="Human",
            occupation="Warrant Officer",
            affiliation="Weyland-Yutani Corporation (formerly)",
            status="Deceased (cloned as Ripley 8)",
            history=(
                "The sole survivor of the USCSS Nostromo incident, Ripley became a key "
                "figure in the fight against the Xenomorphs. She sacrificed her life to "
                "prevent the Weyland-Yutani Corporation from obtaining a Queen embryo."
            ),
            first_appearance="Alien (1979)",
            description=(
                "A resourceful and resilient survivor, Ripley is one of the most iconic "
                "figures in the history of science fiction."
            ),
        ),
        Character(
            id="bishop",
            name="Bishop",
            franchise="Alien",
            species="Synthetic",
            occupation="Executive Officer",
            affiliation="United States Colonial Marine Corps",
            status="Damaged",
            history="Assigned to the USS Sulaco for the rescue mission to Hadley's Hope.",
            first_appearance="Aliens (1986)",
            description="A Hyperdyne Systems 341-B synthetic who proves loyal to the crew.",
        ),
        Organization(
            id="weyland-yutani",
            name="Weyland-Yutani Corporation",
            franchise="Alien",
            type="Conglomerate",
            headquarters="Earth",
            leader="Board of Directors",
            history=(
                "A powerful and ruthless corporation with a hidden agenda to capture and "
                'weaponize the Xenomorph species. They are known for their slogan '
                '"Building Better Worlds" and their willingness to sacrifice human life '
                "for profit."
            ),
            first_appearance="Alien (1979)",
            description=(
                "The primary antagonist of the Alien franchise, the Weyland-Yutani "
                "Corporation represents the worst aspects of corporate greed and ambition."
            ),
        ),
        Organization(
            id="prodigy-corporation",
            name="Prodigy Corporation",
            franchise="Alien: Earth",
            type="Corporation",
            headquarters="Prodigy City, New Siam",
            leader="Boy Kavalier",
            history=(
                "A large corporation that operated on Earth during the Corporate Era in "
                "the early 22nd century. It was a major player in the development of "
                "hybrid technology."
            ),
            first_appearance="Alien: Earth (TV series)",
            description=(
                'A key corporation in the "Alien: Earth" TV series, specializing in the '
                'development of human-consciousness "hybrids".'
            ),
        ),
        Spaceship(
            id="uscss-nostromo",
            name="USCSS Nostromo",
            franchise="Alien",
            ship_class="M-Class Starfreighter",
            registry="180924609",
            owner="Weyland-Yutani Corporation",
            operator="Weyland-Yutani Corporation",
            status="Destroyed",
            history=(
                "A commercial towing vehicle that was diverted to LV-426 to investigate a "
                "distress signal. The crew of the Nostromo had the first recorded human "
                "encounter with a Xenomorph, which resulted in the destruction of the "
                "ship and the loss of all but one crew member."
            ),
            first_appearance="Alien (1979)",
            description=(
                "The iconic spaceship from the first Alien film. The Nostromo's dark, "
                "industrial corridors and claustrophobic atmosphere set the tone for the "
                "entire franchise."
            ),
        ),
        Spaceship(
            id="uss-sulaco",
            name="USS Sulaco",
            franchise="Alien",
            ship_class="Conestoga-class troop transport",
            owner="United Americas",
            operator="United States Colonial Marine Corps",
            status="Decommissioned",
            history="Carried the Colonial Marines to Acheron in response to the loss of contact with the colony.",
            first_appearance="Aliens (1986)",
            description="A military transport carrying a dropship, APC and a platoon of Colonial Marines.",
        ),
        Movie(
            id="alien-1979",
            name="Alien",
            franchise="Alien",
            director="Ridley Scott",
            release_year=1979,
            plot_summary=(
                "The crew of a commercial towing ship answers a distress call and brings "
                "a deadly organism aboard."
            ),
            characters=["Ellen Ripley", "Dallas", "Kane", "Ash", "Lambert", "Parker", "Brett"],
            setting="USCSS Nostromo",
            description="The original film that introduced the Xenomorph and Ellen Ripley.",
        ),
        Movie(
            id="alien-romulus",
            name="Alien: Romulus",
            franchise="Alien",
            director="Fede Álvarez",
            release_year=2024,
            plot_summary=(
                "A group of young space colonizers scavenging a derelict space station "
                "face a terrifying life-form."
            ),
            characters=["Rain Carradine", "Tyler", "Andy", "Kay", "Bjorn", "Navarro"],
            setting="Romulus space station",
            description=(
                "A standalone film in the Alien franchise, set between the events of "
                "Alien (1979) and Aliens (1986)."
            ),
        ),
    ]
