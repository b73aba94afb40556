from formlogic.debugger.fields import collect_referenced_fields, field_label
from formlogic.debugger.schemas import FieldElement, Rule


def test_field_label_searches_nested_elements():
    elements = [
        FieldElement.model_validate(
            {
                "id": "grid",
                "type": "grid",
                "elements": [{"id": "email", "label": "Email address", "type": "email", "required": True}],
            }
        ),
        FieldElement(id="nolabel"),
    ]
    assert field_label(elements, "email") == "Email address"
    assert field_label(elements, "nolabel") == "nolabel"
    assert field_label(elements, "missing") == "missing"


def test_collect_referenced_fields():
    rule = Rule.model_validate(
        {
            "id": "r",
            "name": "r",
            "triggerFieldId": "country",
            "conditions": [{"fieldId": "age", "operator": "isEmpty"}],
            "actions": [{"type": "show", "targetId": "zip"}, {"type": "hide", "targetId": "age"}],
        }
    )
    assert collect_referenced_fields([rule]) == ["age", "country", "zip"]
