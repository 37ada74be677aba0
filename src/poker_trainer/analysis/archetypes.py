"""Player archetypes: tight/loose x aggressive/passive x transparent/deceptive."""

from typing import Dict, Tuple

from poker_trainer.models.stats import ArchetypeDimensions, PlayerArchetypeInfo, PlayStyle

# Classification thresholds
LOOSE_VPIP = 30.0
TIGHT_VPIP = 22.0
AGGRESSIVE_PFR = 15.0
AGGRESSIVE_FACTOR = 1.5
PASSIVE_PFR = 12.0
PASSIVE_FACTOR = 1.2
TRANSPARENT_T_SCORE = 60
DECEPTIVE_T_SCORE = 40

# Tie-breaks when only some dimensions are balanced
LOOSE_FALLBACK_VPIP = 26.0
AGGRESSIVE_FALLBACK_FACTOR = 1.35
TRANSPARENT_FALLBACK_T_SCORE = 50


def _info(archetype: str, abbrev: str, style: str, description: str, advice: str,
          dims: Tuple[str, str, str]) -> PlayerArchetypeInfo:
    return PlayerArchetypeInfo(
        archetype=archetype,
        abbrev=abbrev,
        style=style,
        description=description,
        advice=advice,
        dimensions=ArchetypeDimensions(*dims),
    )


ARCHETYPES: Dict[Tuple[str, str, str], PlayerArchetypeInfo] = {
    ("loose", "aggressive", "transparent"): _info(
        "The Showboat", "LAG-T", "red",
        "Plays many hands aggressively and honestly. Bets big with big hands, checks "
        "weak ones. Easy to read once you spot the pattern.",
        "Your aggression is good, but your betting tells the whole story. Mix in "
        "occasional bluffs with your big bets to keep opponents guessing.",
        ("loose", "aggressive", "transparent"),
    ),
    ("loose", "aggressive", "deceptive"): _info(
        "The Wildcard", "LAG-D", "bold red",
        "The most dangerous archetype. Plays many hands, bets aggressively, and you "
        "never know if they have it or not. Maximum chaos.",
        "You are hard to play against but high-variance. Make sure your bluffs have "
        "a plan and your value bets are sized to get called.",
        ("loose", "aggressive", "deceptive"),
    ),
    ("tight", "aggressive", "transparent"): _info(
        "The Glass Cannon", "TAG-T", "green",
        "Selective and aggressive, but big bets always mean big hands. Opponents can "
        "fold to your raises unless they have the goods.",
        "Your hand selection is strong, but opponents will learn to fold against your "
        "bets. Add some well-timed bluffs to keep them honest.",
        ("tight", "aggressive", "transparent"),
    ),
    ("tight", "aggressive", "deceptive"): _info(
        "The Assassin", "TAG-D", "bold green",
        "The feared tournament shark. Picks spots carefully, then strikes with force, "
        "whether or not they have it.",
        "This is the gold standard of poker styles. Keep your opponents off-balance "
        "and continue to mix your betting patterns.",
        ("tight", "aggressive", "deceptive"),
    ),
    ("loose", "passive", "transparent"): _info(
        "The Open Book", "LP-T", "yellow",
        "Calls too much and bets only when connected. The most exploitable type: "
        "opponents can value bet relentlessly.",
        "Tighten your hand selection and bet more with your strong hands. Playing "
        "passively and transparently makes you an easy target.",
        ("loose", "passive", "transparent"),
    ),
    ("loose", "passive", "deceptive"): _info(
        "The Sandtrapper", "LP-D", "bold yellow",
        "Appears passive but sets traps with slow-plays and surprise check-raises. "
        "Do not underestimate the quiet ones.",
        "Your deception is a weapon, but playing too many hands costs chips. Be more "
        "selective with your starting hands.",
        ("loose", "passive", "deceptive"),
    ),
    ("tight", "passive", "transparent"): _info(
        "The Statue", "TP-T", "blue",
        "Plays few hands, rarely bets, and when they do it is exactly what it looks "
        "like. Predictable and straightforward.",
        "You are too easy to play against. When you have strong hands, bet and raise "
        "more to build the pot and extract value.",
        ("tight", "passive", "transparent"),
    ),
    ("tight", "passive", "deceptive"): _info(
        "The Spider", "TP-D", "bold blue",
        "Waits patiently, playing few hands, but weaves deception with unpredictable "
        "bet sizing. Slow-plays monsters and surprise-bluffs.",
        "Your patience and deception are a great combo. Try to raise more preflop "
        "with your strong hands to build bigger pots.",
        ("tight", "passive", "deceptive"),
    ),
}

BALANCED = _info(
    "The Enigma", "BAL", "magenta",
    "Falls between all extremes. No clear pattern to exploit, the hardest opponent "
    "to play against.",
    "A balanced style is great. Keep adjusting to your opponents rather than playing "
    "the same way against everyone.",
    ("balanced", "balanced", "balanced"),
)


def classify_player(play_style: PlayStyle, t_score: int) -> PlayerArchetypeInfo:
    """Place hero in one of the nine archetypes.

    Args:
        play_style: VPIP, PFR and aggression for the session.
        t_score: The composite transparency score.

    Returns:
        The matching archetype. A player balanced on every dimension is
        The Enigma; otherwise balanced dimensions lean to the nearer side.
    """
    is_loose = play_style.vpip > LOOSE_VPIP
    is_tight = play_style.vpip < TIGHT_VPIP
    is_aggressive = (play_style.pfr > AGGRESSIVE_PFR
                     or play_style.aggression > AGGRESSIVE_FACTOR)
    is_passive = (play_style.pfr < PASSIVE_PFR
                  and play_style.aggression < PASSIVE_FACTOR)
    is_transparent = t_score >= TRANSPARENT_T_SCORE
    is_deceptive = t_score < DECEPTIVE_T_SCORE

    if (not is_loose and not is_tight
            and not is_aggressive and not is_passive
            and not is_transparent and not is_deceptive):
        return BALANCED

    if is_loose or is_tight:
        tight_loose = "loose" if is_loose else "tight"
    else:
        tight_loose = "loose" if play_style.vpip >= LOOSE_FALLBACK_VPIP else "tight"

    if is_aggressive:
        aggressive_passive = "aggressive"
    elif is_passive:
        aggressive_passive = "passive"
    else:
        aggressive_passive = ("aggressive" if play_style.aggression >= AGGRESSIVE_FALLBACK_FACTOR
                              else "passive")

    if is_transparent or is_deceptive:
        deceptive_transparent = "transparent" if is_transparent else "deceptive"
    else:
        deceptive_transparent = ("transparent" if t_score >= TRANSPARENT_FALLBACK_T_SCORE
                                 else "deceptive")

    return ARCHETYPES.get((tight_loose, aggressive_passive, deceptive_transparent), BALANCED)
