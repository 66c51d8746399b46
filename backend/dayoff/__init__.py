"""Day-Off Planner - advance-notice deadlines and calendar exports"""
