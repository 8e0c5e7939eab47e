from typing import Dict, List

from ..core.types import Scenario

# Field values shared by the deterministic steps and the assertions
FORM_VALUES = {
    "#userName": "John Smith",
    "#userEmail": "john.smith@example.com",
    "#currentAddress": "123 Example Street",
    "#permanentAddress": "456 Permanent Avenue",
}

TABLE_VALUES = {
    "#firstName": "Alice",
    "#lastName": "Johnson",
    "#userEmail": "alice.johnson@example.com",
    "#age": "30",
    "#salary": "50000",
    "#department": "QA",
}

SCENARIOS: List[Scenario] = [
    {
        "key": "text_box",
        "name": "Text Box Form",
        "path": "text-box",
        "ready_selector": "#userName",
        "steps": [{"action": "fill", "selector": sel, "value": val} for sel, val in FORM_VALUES.items()]
        + [{"action": "click", "selector": "#submit"}],
        "instruction": (
            "Fill the 'Full Name', 'Email', 'Current Address', and 'Permanent Address' fields "
            "with example data, then click the 'Submit' button."
        ),
        "settle_selector": "#output",
        "probe": {"kind": "text", "selector": "#output"},
        "observe": "Observe the output area after submitting the form and return its text",
        "extract": "Extract the output text after submitting the form",
        "hybrid_extract": "Read and return the confirmation text displayed after submitting the form.",
    },
    {
        "key": "buttons",
        "name": "Buttons",
        "path": "buttons",
        "ready_selector": "button#doubleClickBtn",
        "steps": [{"action": "click_last", "selector": "button.btn.btn-primary"}],
        "instruction": "Click the 'Click Me' button.",
        "settle_selector": "#dynamicClickMessage",
        "probe": {"kind": "text", "selector": "#dynamicClickMessage"},
        "observe": "Observe the message displayed after clicking the 'Click Me' button.",
        "extract": "Extract the message after clicking the 'Click Me' button.",
        "hybrid_extract": "What message appears after clicking the 'Click Me' button? Return the full text.",
    },
    {
        "key": "check_box",
        "name": "Check Box",
        "path": "checkbox",
        "ready_selector": ".rct-checkbox",
        "steps": [{"action": "click", "selector": ".rct-checkbox"}],
        "instruction": "Check the main checkbox in the tree.",
        "settle_selector": "#result",
        "probe": {"kind": "text", "selector": "#result"},
        "observe": "Observe and list all checked items",
        "extract": "Extract the checked items",
        "hybrid_extract": "List all items that are checked after interacting with the checkbox.",
    },
    {
        "key": "radio_button",
        "name": "Radio Button",
        "path": "radio-button",
        "ready_selector": "label[for='yesRadio']",
        "steps": [{"action": "click", "selector": "label[for='yesRadio']"}],
        "instruction": "Select the radio button labeled 'Yes'.",
        "settle_selector": ".text-success",
        "probe": {"kind": "text", "selector": ".text-success"},
        "observe": "Observe which radio button is selected",
        "extract": "Extract the selected radio button result",
        "hybrid_extract": "What is the result text shown after selecting the 'Yes' radio button?",
    },
    {
        "key": "web_tables",
        "name": "Web Tables",
        "path": "webtables",
        "ready_selector": "#addNewRecordButton",
        "steps": [{"action": "click", "selector": "#addNewRecordButton"}]
        + [{"action": "fill", "selector": sel, "value": val} for sel, val in TABLE_VALUES.items()]
        + [{"action": "click", "selector": "#submit"}],
        "instruction": (
            "Add a new row to the web table with first name 'Alice', last name 'Johnson', "
            "email 'alice.johnson@example.com', age '30', salary '50000', department 'QA', and submit."
        ),
        "settle_selector": ".rt-tr-group",
        "probe": {"kind": "rows", "selector": ".rt-tbody .rt-tr-group"},
        "observe": "Observe and list all rows in the web table",
        "extract": "Extract all rows from the web table",
        "hybrid_extract": "Return all rows from the web table, including the newly added entry for Alice Johnson.",
        "expect_contains": ["Alice", "Johnson"],
        "compare_baseline": True,
    },
    {
        "key": "upload",
        "name": "Upload and Download",
        "path": "upload-download",
        "ready_selector": "#uploadFile",
        "steps": [{"action": "upload", "selector": "#uploadFile"}],
        "instruction": "Upload the file 'sample.txt' using the upload button.",
        "settle_selector": "#uploadedFilePath",
        "probe": {"kind": "input_value", "selector": "#uploadFile"},
        "observe": "Observe the uploaded file name",
        "extract": "Extract the uploaded file name",
        "hybrid_extract": (
            "What is the name of the file shown as uploaded after submitting 'sample.txt'? "
            "Return the displayed filename."
        ),
        "expect_contains": ["sample.txt"],
    },
    {
        "key": "alerts",
        "name": "Alerts",
        "path": "alerts",
        "ready_selector": "#alertButton",
        "steps": [{"action": "click", "selector": "#alertButton"}],
        "instruction": "Click the button to trigger the alert dialog.",
        "probe": {"kind": "dialog"},
        # The dialog is dismissed as soon as it opens, so only the captured message can be read
        "observe": None,
        "extract": None,
        "hybrid_extract": None,
    },
    {
        "key": "navigation",
        "name": "Navigation",
        "path": "",
        "ready_selector": "div.card",
        "steps": [
            {"action": "click", "selector": 'div.card:has-text("Elements")'},
            {"action": "click", "selector": 'span:has-text("Text Box")'},
        ],
        "instruction": "Go to the 'Elements' card and open the 'Text Box' section.",
        "settle_selector": "#userName",
        "probe": {"kind": "visible", "selector": "#userName"},
        "observe": "Observe which section is currently open",
        "extract": None,
        "hybrid_extract": None,
    },
    {
        "key": "list_buttons",
        "name": "Extract all visible buttons on the Elements page",
        "path": "elements",
        "ready_selector": "button",
        "steps": [],
        "instruction": None,
        "probe": {"kind": "texts", "selector": "button"},
        "observe": "Observe and list all visible buttons on the page with their text",
        "extract": "List all visible buttons on the page with their text",
        "hybrid_extract": "List every visible button on the page and provide the text shown on each one.",
    },
]

SCENARIOS_BY_KEY: Dict[str, Scenario] = {s["key"]: s for s in SCENARIOS}


def get_scenario(key: str) -> Scenario:
    try:
        return SCENARIOS_BY_KEY[key]
    except KeyError:
        raise ValueError(f"Unknown scenario '{key}'. Known: {', '.join(SCENARIOS_BY_KEY)}") from None
