from __future__ import annotations

from plannity.schemas import ACTIVITY_TYPES, TripRequest


def _format_amount(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def build_prompt(request: TripRequest) -> str:
    """Render the single user message sent to the completion model."""
    start = request.date_range.start.isoformat()
    end = request.date_range.end.isoformat()
    type_choices = " または ".join(f'"{t}"' for t in ACTIVITY_TYPES)

    return (
        "あなたは旅行プランナーです。以下の条件に基づいて、詳細な旅行プランを日本語で作成してください。\n"
        "\n"
        f"目的地: {request.destination}\n"
        f"予算: {_format_amount(request.budget)}円\n"
        f"人数: {request.people}人\n"
        f"期間: {request.number_of_days}日間 ({start} から {end})\n"
        f"旅のスタイル: {request.travel_style}\n"
        "\n"
        "以下の形式のJSONオブジェクトを1つだけ出力してください。前後に説明文を付けないでください。\n"
        "\n"
        "{\n"
        '  "destination": "目的地名",\n'
        '  "summary": "旅行の概要説明（200文字程度）",\n'
        '  "days": [\n'
        "    {\n"
        '      "day": 1,\n'
        '      "date": "YYYY-MM-DD",\n'
        '      "activities": [\n'
        "        {\n"
        '          "time": "09:00",\n'
        '          "activity": "活動名",\n'
        '          "location": "場所名",\n'
        '          "description": "簡単な説明",\n'
        f'          "type": {type_choices}\n'
        "        }\n"
        "      ]\n"
        "    }\n"
        "  ]\n"
        "}\n"
        "\n"
        f"days は {request.number_of_days} 日分すべてを day 1 から順番に含め、"
        f"date は {start} から1日ずつ進めてください。\n"
        "各日に少なくとも朝食、昼食、夕食、宿泊施設を含めてください。また、観光スポットや活動も含めてください。\n"
        "予算内で実現可能な現実的なプランを作成してください。\n"
        f"地元の人気スポットや、{request.travel_style}に合った場所を優先してください。\n"
        "実在する場所や施設の名前を使用してください。\n"
    )
