from __future__ import annotations

from typing import List

from suggester.schemas import MAX_SUGGESTIONS, SuggestionRequest


SECTION_SEPARATOR = "\n\n"


def build_prompt(request: SuggestionRequest) -> str:
    """Render the Arabic instruction text sent to Gemini for one field.

    Optional "known info" and "constraints" blocks are left out entirely
    when empty.
    """
    lines: List[str] = [
        "أنت مساعد محترف لملء حقول نموذج Misbah+.",
        f"مهمة المستخدم هي إعداد {request.module_name} للحصول على {request.desired_outcome}.",
        f"الرجاء اقتراح {MAX_SUGGESTIONS} قيم محتملة لخانة «{request.field_id}» في النموذج.",
    ]
    if request.known_info:
        lines.append(f"معلومات إضافية:\n{request.known_info}")
    if request.constraints:
        lines.append(f"قيود إضافية:\n{request.constraints}")
    lines.extend(
        [
            f"أجب باللغة {request.language} فقط.",
            "لا تقدم أي أمثلة توضيحية. استعمل عبارات قصيرة واضحة.",
            "أعد الاقتراحات كسطر واحد لكل قيمة. لا تبدأ بأي تعداد.",
        ]
    )
    return SECTION_SEPARATOR.join(lines)
