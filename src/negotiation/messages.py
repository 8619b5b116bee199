"""
Agent messaging for negotiation outcomes.

Message choice depends only on the personality (and the counter theme), so
replaying a negotiation reproduces the same text.
"""

from player_personality.personality import PlayerPersonality


COUNTER_MESSAGES = {
    "aav": (
        "We need to see more money on the table. My client deserves market value.",
        "The AAV is below what we're seeing for similar players. Let's bridge this gap.",
        "We're looking for a stronger financial commitment. Can you improve the annual value?",
    ),
    "gtd": (
        "The guarantees aren't strong enough. My client needs security.",
        "We need stronger guarantees to protect against injury and roster changes.",
        "The guaranteed money is too low. Let's make this deal more secure.",
    ),
    "years": (
        "The contract length doesn't provide the stability my client is looking for.",
        "We need a longer commitment to justify the investment.",
        "The years don't match our long-term vision. Can we extend the term?",
    ),
}


def acceptance_message(personality: PlayerPersonality) -> str:
    if personality.loyalty > 0.7:
        return "My client is excited to join your organization. We have a deal!"
    if personality.money_vs_role > 0.6:
        return "The financial terms work for us. We're ready to sign."
    return "This offer meets our requirements. Let's get this done."


def lowball_message(personality: PlayerPersonality) -> str:
    if personality.agent_quality > 0.7:
        return "That offer is disrespectful. We're raising our ask significantly."
    return "That's too low. We need to see a much better offer to continue talks."


def counter_message(theme: str, personality: PlayerPersonality) -> str:
    """Pick a message for the counter's theme; stronger agents use sharper lines."""
    pool = COUNTER_MESSAGES.get(theme, COUNTER_MESSAGES["aav"])
    index = min(int(personality.agent_quality * 3), len(pool) - 1)
    return pool[index]


def expiry_message() -> str:
    return "We've run out of patience. My client is moving on."


def decline_message() -> str:
    return "The team has ended negotiations."
