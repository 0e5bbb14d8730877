import random
from typing import Optional

# Every template is passed through str.format(title=...); only one uses it.
INSULT_TEMPLATES = (
    "その本、まだ読んでないんですか？時間の無駄ですね。",
    "積読ですか。残念ですね。その本は二度と読まれないでしょう。",
    "知識は鮮度が命。その本はもう腐っています。",
    "「{title}」を読むというタスクは、あなたの優先順位リストに存在しないようですね。",
    "あなたの本棚、もはや墓場ですね。未完の志が眠る場所。",
)


def generate_insult(title: str, rng: Optional[random.Random] = None) -> str:
    """Pick one template uniformly at random and fill in the book title."""
    chooser = rng or random
    template = chooser.choice(INSULT_TEMPLATES)
    return template.format(title=title)
