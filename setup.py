from setuptools import setup, find_packages

setup(
    name="prompt-executor",
    version="1.0.0",
    description="Run managed prompts on pluggable LLM backends and report every execution",
    packages=find_packages(include=["prompt_executor", "prompt_executor.*"]),
    python_requires=">=3.9",
    install_requires=[
        "openai>=1.0.0",
        "anthropic>=0.18.0",
        "google-generativeai>=0.3.0",
        "requests>=2.31.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
