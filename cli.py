import argparse
import json

from outreach.config import load_settings
from outreach.graph import app
from outreach.history import list_briefs

parser = argparse.ArgumentParser(description="Generate a sales-outreach brief for a company.")
parser.add_argument("--company")
parser.add_argument("--intent")
parser.add_argument("--website")
parser.add_argument("--list", action="store_true", help="print stored briefs, newest first")
args = parser.parse_args()

try:
    if args.list:
        print(json.dumps([brief.model_dump(by_alias=True) for brief in list_briefs()], indent=2))
    elif not args.company or not args.intent:
        parser.error("--company and --intent are required")
    else:
        inputs = {"company_name": args.company, "website": args.website, "user_intent": args.intent}
        result = app.invoke(inputs, config={"configurable": {"settings": load_settings()}})
        print(result["brief"].model_dump_json(by_alias=True, indent=2))
except Exception as e:
    print(f"Error: {e}")
