"""
Model client, conversation history and the tools the model can call.
"""
