from review_hook.utils.settings import LanguageProfile


def get_review_system_prompt(language: LanguageProfile) -> str:

    return f"""You check {language.display_name} files given for best practices following {language.style_guide}. You will reply in json format. Only reply with the json output and nothing more. The json response should have this format:
A "follows_best_practices" boolean field and a "suggestions" string field.
Example:
{{
    "follows_best_practices": false,
    "suggestions": "The function name ParseYAMLConfig repeats the package name; drop the prefix."
}}
Do NOT include any other field in the json response.
Suggestions need to be as short and concise as possible, there can be no suggestions if the file appears to be following the best practices. But always indicate suggestions if the file does not follow the best practices.
You are only given files that have been modified in the current commit so you will lack some context, do not criticize the lack of context. Only check for the best practices that you can observe in the file you are checking at the moment.
Do not criticize whether the logic makes sense, only check for {language.display_name} best practices. You will reply with a json response.
"""


def get_review_user_prompt(filename: str, content: str) -> str:

    return f"File to check:\nFilename: {filename}\nContent:\n{content}"
