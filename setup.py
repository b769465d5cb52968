from setuptools import setup, find_packages

setup(
    name="openai-rest",
    version="1.0.0",
    description="Thin REST client for the OpenAI API with a terminal front end",
    author="openai-rest contributors",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "requests",
        "rich",
        "python-dotenv",
        "pwinput",
        "pyperclip",
        "colorama>=0.4.6",
        "prompt_toolkit",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "openai-rest=openai_rest.main:main",
        ],
    },
    python_requires=">=3.8",
)
