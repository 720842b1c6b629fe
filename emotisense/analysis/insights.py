"""Insight sentence templates.

Each finding kind has exactly one template. Emotion names, periods and
terms are interpolated verbatim; counts are formatted as integers.
"""

from emotisense.models import ConsistencyResult, EmotionCount, EmotionGroup


FREQUENCY_TEMPLATE = 'Your most frequently detected emotion is "{emotion}" appearing {count} times.'
TIME_TEMPLATE = '"{emotion}" occurs most often during {period} hours.'
DAY_TEMPLATE = '{period}s show the highest emotional activity, with "{emotion}" being most common.'
TRIGGER_TEMPLATE = (
    '"{trigger}" appears to be a significant situational trigger, '
    'often associated with "{emotion}".'
)
PHYSICAL_TEMPLATE = '{aspect} sensations frequently correlate with "{emotion}" emotional experiences.'
CONSISTENCY_TEMPLATE = (
    "You showed consistent emotional patterns across "
    "{consistent} of {total} day transitions."
)


def frequency_insight(top: EmotionCount) -> str:
    return FREQUENCY_TEMPLATE.format(emotion=top.emotion, count=int(top.count))


def time_of_day_insight(groups: list[EmotionGroup]) -> str:
    top = groups[0]
    return TIME_TEMPLATE.format(emotion=top.dominant_emotion, period=top.key)


def day_of_week_insight(groups: list[EmotionGroup]) -> str:
    top = groups[0]
    return DAY_TEMPLATE.format(emotion=top.dominant_emotion, period=top.key)


def trigger_insight(groups: list[EmotionGroup]) -> str:
    top = groups[0]
    return TRIGGER_TEMPLATE.format(trigger=top.key, emotion=top.dominant_emotion)


def physical_insight(groups: list[EmotionGroup]) -> str:
    top = groups[0]
    return PHYSICAL_TEMPLATE.format(aspect=top.key, emotion=top.dominant_emotion)


def consistency_insight(result: ConsistencyResult) -> str:
    return CONSISTENCY_TEMPLATE.format(
        consistent=int(result.consistent_days),
        total=int(result.total_transitions),
    )
