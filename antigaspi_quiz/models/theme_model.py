"""
models/theme_model.py

화면 테마/문구 설정.
두 변형(anti_gaspi, eco)은 채점 엔진을 공유하고 문구, 아이콘, 색상,
보조 지표 표시 여부만 다르다.
"""

from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field

from antigaspi_quiz.models.recap_model import FeedbackTier


class TierCopy(BaseModel):
    """등급별 피드백 문구."""
    narrative: str
    tip: str
    icon: str = ""
    color: str = "#d97706"


class Theme(BaseModel):
    model_config = {"frozen": True}

    name: str
    title: str
    recap_title: str
    score_label: str = Field(..., description="퍼센트 아래 표시 문구")
    chart_labels: Tuple[str, str] = Field(..., description="(좋은 부분, 낭비 부분)")
    primary_color: str = "#d97706"
    good_color: str = "#f59e0b"
    bad_color: str = "#ef4444"
    tiers: Dict[FeedbackTier, TierCopy]

    # 보조 지표
    waste_reference: float = Field(30, description="국가 평균 연간 낭비량 K")
    waste_unit: str = "kg"
    waste_label: str = "Estimation annuelle"
    waste_caption: str = "de nourriture gaspillée par an"
    savings_label: str = "Économies potentielles"
    savings_caption: str = "par rapport à la moyenne nationale"
    show_waste_cost: bool = False
    waste_cost_label: str = "Coût annuel du gaspillage"
    currency: str = "€"

    # 버튼 / 안내 문구
    previous_label: str = "Précédent"
    next_label: str = "Suivant"
    results_label: str = "Voir mes résultats"
    restart_label: str = "Recommencer le questionnaire"
    start_label: str = "Commencer le quiz"
    breakdown_label: str = "Détail de mes réponses"
    tip_label: str = "Astuce anti-gaspi"
    no_answer_prompt: str = "Veuillez sélectionner une réponse."
    unanswered_label: str = "Non répondu"
    input_placeholder: str = 'Entrez une valeur{unit}... Ou "Je ne sais pas" si applicable.'

    def placeholder_for(self, unit: Optional[str]) -> str:
        return self.input_placeholder.format(unit=f" (en {unit})" if unit else "")


# ── 테마 정의 ────────────────────────────────────────────────────────────────

ANTI_GASPI_THEME = Theme(
    name="anti_gaspi",
    title="Quiz : Vos Habitudes Écologiques",
    recap_title="Votre Bilan Anti-Gaspi",
    score_label="Score anti-gaspi",
    chart_labels=("Anti-Gaspi (%)", "Gaspillage (%)"),
    tiers={
        FeedbackTier.HIGH: TierCopy(
            narrative=(
                "Félicitations ! Vous êtes un champion de l'anti-gaspillage alimentaire. "
                "Vos habitudes préservent les ressources et la planète ! 🥗"
            ),
            tip=(
                "Partagez vos restes alimentaires avec des applications comme "
                "'Too Good To Go' ou dans votre communauté locale !"
            ),
            icon="🥣",
            color="#d97706",
        ),
        FeedbackTier.MEDIUM: TierCopy(
            narrative=(
                "Pas mal ! Vous avez de bonnes pratiques mais quelques ajustements "
                "peuvent encore réduire votre gaspillage alimentaire. 🍎"
            ),
            tip=(
                "Planifiez vos repas à l'avance et n'achetez que ce dont vous avez besoin. "
                "Cela réduit les achats impulsifs et le gaspillage."
            ),
            icon="🥕",
            color="#ea580c",
        ),
        FeedbackTier.LOW: TierCopy(
            narrative=(
                "Il y a de la marge de progression ! De petits changements dans vos "
                "habitudes peuvent faire une grande différence. 🥕"
            ),
            tip=(
                "Apprenez à conserver correctement vos aliments et à comprendre la différence "
                "entre 'à consommer de préférence avant' et 'à consommer jusqu'au'."
            ),
            icon="🍞",
            color="#ef4444",
        ),
    },
)

ECO_THEME = Theme(
    name="eco",
    title="Quiz : Vos Habitudes Écologiques",
    recap_title="Votre Bilan Écologique",
    score_label="Score éco",
    chart_labels=("Éco-responsable (%)", "Gaspillage (%)"),
    primary_color="#16a34a",
    good_color="#22c55e",
    bad_color="#ef4444",
    show_waste_cost=True,
    tip_label="Astuce éco",
    tiers={
        FeedbackTier.HIGH: TierCopy(
            narrative=(
                "Bravo ! Vos habitudes alimentaires sont exemplaires pour la planète. 🌍"
            ),
            tip="Compostez vos épluchures pour boucler la boucle !",
            icon="🌳",
            color="#16a34a",
        ),
        FeedbackTier.MEDIUM: TierCopy(
            narrative=(
                "Bon début ! Quelques gestes simples peuvent encore alléger "
                "votre empreinte. 🌱"
            ),
            tip="Faites une liste de courses et vérifiez votre frigo avant d'acheter.",
            icon="🌿",
            color="#65a30d",
        ),
        FeedbackTier.LOW: TierCopy(
            narrative=(
                "Votre impact peut être nettement réduit ! Chaque aliment sauvé "
                "compte pour la planète. 🍂"
            ),
            tip="Rangez les produits les plus anciens devant dans le frigo et congelez les restes.",
            icon="🍂",
            color="#dc2626",
        ),
    },
)

THEMES: Dict[str, Theme] = {t.name: t for t in (ANTI_GASPI_THEME, ECO_THEME)}


def get_theme(name: str) -> Theme:
    """테마 이름 → Theme. 없으면 KeyError."""
    try:
        return THEMES[name]
    except KeyError:
        raise KeyError(f"알 수 없는 테마입니다: {name} (가능: {', '.join(THEMES)})") from None
