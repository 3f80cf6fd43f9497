from langgraph.graph import END, START, StateGraph

from .nodes import (
    domain_resolution, job_collection, news_collection, persistence,
    synthesis, tech_inference
)
from .state import BriefState

graph = StateGraph(state_schema=BriefState)

graph.add_node("domain_resolution", domain_resolution)
graph.add_node("news_collection", news_collection)
graph.add_node("job_collection", job_collection)
graph.add_node("tech_inference", tech_inference)
graph.add_node("synthesis", synthesis)
graph.add_node("persistence", persistence)

graph.add_edge(START, "domain_resolution")
# News and jobs are independent, so they run as parallel branches
graph.add_edge("domain_resolution", "news_collection")
graph.add_edge("domain_resolution", "job_collection")
graph.add_edge(["news_collection", "job_collection"], "tech_inference")
graph.add_edge("tech_inference", "synthesis")
graph.add_edge("synthesis", "persistence")
graph.add_edge("persistence", END)

app = graph.compile()
